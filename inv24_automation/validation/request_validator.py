"""
Validators for invocation inputs.

Both run before any browser session is opened.
"""

from typing import Dict, Any

from .validators import Validator, ValidationResult


class CredentialsValidator(Validator):
    """
    Validator for INV24 login credentials.

    Validates:
    - Login and secret are present (errors)
    - Login looks like an email address (warning only; INV24 decides)

    Examples:
        >>> result = CredentialsValidator().validate(
        ...     {"login": "owner@example.com", "secret": "s3cret"}
        ... )
        >>> result.is_valid
        True
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["login", "secret"]):
            result.add_error(error)

        login = data.get("login")
        if login:
            email_error = self.validate_email_format(login, "login")
            if email_error:
                result.add_warning(email_error)

        return result


class SendRequestValidator(Validator):
    """
    Validator for a dispatch request.

    Exactly one of ``invoice_id`` or ``invoice_number`` must be given.
    Non-numeric values are accepted with a warning.

    Examples:
        >>> result = SendRequestValidator().validate({"invoice_id": "1119419"})
        >>> result.is_valid
        True
        >>> SendRequestValidator().validate({}).errors
        ['Provide exactly one of --invoice-id or --invoice-number']
    """

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        invoice_id = data.get("invoice_id")
        invoice_number = data.get("invoice_number")

        if bool(invoice_id) == bool(invoice_number):
            result.add_error("Provide exactly one of --invoice-id or --invoice-number")
            return result

        if invoice_id:
            warning = self.validate_digits(str(invoice_id), "invoice_id")
        else:
            warning = self.validate_digits(str(invoice_number), "invoice_number")
        if warning:
            result.add_warning(warning)

        return result
