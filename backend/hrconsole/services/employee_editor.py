from __future__ import annotations

import logging

from hrconsole.core.config import Settings
from hrconsole.models.auth import ConsoleSession
from hrconsole.models.employee import Employee, EmployeeFormOptions, EmployeeInput
from hrconsole.services.hr_api_client import HrApiClient, HrApiError
from hrconsole.services.notifications import Notifier

logger = logging.getLogger(__name__)

SAVE_FAILED = "An error occurred while saving employee"


class EmployeeValidationError(Exception):
    pass


def has_company_domain(email: str, domain: str) -> bool:
    return email.endswith(domain)


class EmployeeEditor:
    def __init__(
        self,
        client: HrApiClient,
        session: ConsoleSession,
        settings: Settings,
        notifier: Notifier | None = None,
    ) -> None:
        self.client = client
        self.session = session
        self.email_domain = settings.EMAIL_DOMAIN
        self.notifier = notifier or Notifier()

    async def load_options(self) -> EmployeeFormOptions:
        try:
            departments = await self.client.list_departments(self.session)
            designations = await self.client.list_designations(self.session)
        except HrApiError:
            logger.exception("Failed to load employee form options")
            self.notifier.error("Failed to load form data")
            raise
        return EmployeeFormOptions(departments=departments, designations=designations)

    async def load_employee(self, employee_id: int) -> Employee:
        try:
            return await self.client.get_employee(self.session, employee_id)
        except HrApiError:
            logger.exception("Failed to load employee %s", employee_id)
            self.notifier.error("Failed to load form data")
            raise

    def check_email(self, email: str) -> bool:
        """Field-level check run when the email input loses focus.

        An empty field is not flagged yet; a foreign domain queues a warning
        but does not block editing.
        """
        if not email or has_company_domain(email, self.email_domain):
            return True
        self.notifier.warning(f"Email must end with {self.email_domain}")
        return False

    def validate(self, data: EmployeeInput) -> None:
        if not has_company_domain(data.email, self.email_domain):
            message = f"Email address must end with {self.email_domain}"
            self.notifier.error(message)
            raise EmployeeValidationError(message)

    async def save(self, data: EmployeeInput, employee_id: int | None = None) -> Employee:
        """Create or update an employee.

        The email domain is checked before anything is sent. Field errors
        returned by the API are reported one notification per message and the
        original ``HrApiError`` is re-raised.
        """
        self.validate(data)

        payload = data.to_payload()
        try:
            if employee_id is not None:
                employee = await self.client.update_employee(self.session, employee_id, payload)
            else:
                employee = await self.client.create_employee(self.session, payload)
        except HrApiError as err:
            logger.exception("Failed to save employee (id=%s)", employee_id)
            messages = err.field_messages()
            for message in messages or [SAVE_FAILED]:
                self.notifier.error(message)
            raise

        if employee_id is not None:
            self.notifier.success("Employee updated successfully!")
        else:
            self.notifier.success("Employee added successfully!")
        return employee
