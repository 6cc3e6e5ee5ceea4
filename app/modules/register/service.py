import logging
from typing import Any, Dict

from supabase import Client

from app.core.errors import ApiError, truncate
from app.modules.licenses.service import LedgerError, LicenseLedger
from app.modules.register.provider_errors import classify_signup_error, signup_error_status
from app.modules.register.saga import Saga, SagaFailed, SagaStep
from app.modules.register.schemas import RegisterRequest, RegisterResponse
from app.modules.tax_id.validators import password_checks, password_error_message, validate_cpf_or_cnpj

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


def _provider_message(e: Exception) -> str:
    return getattr(e, "message", None) or str(e)


class RegistrationService:
    """
    Account + profile + license creation.

    The three writes live in different systems (Supabase Auth, the profiles
    table, the Sheets ledger), so the flow runs as a saga: once the auth
    account exists, any later failure deletes it again.
    """

    def __init__(self, auth_client: Client, service_client: Client, ledger: LicenseLedger):
        self.auth_client = auth_client
        self.service_client = service_client
        self.ledger = ledger

    def register(self, data: RegisterRequest, email_redirect_to: str) -> RegisterResponse:
        if not validate_cpf_or_cnpj(data.cpf):
            raise ApiError(400, "invalid_document")
        checks = password_checks(data.password)
        if not all(checks.values()):
            raise ApiError(422, "weak_password", detail=password_error_message(checks))

        saga = Saga(
            "register",
            [
                SagaStep("check_duplicate_cpf", self._check_duplicate_cpf),
                SagaStep("sign_up", self._sign_up, compensate=self._delete_account),
                SagaStep("update_profile", self._update_profile),
                SagaStep("upsert_license", self._upsert_license),
            ],
            on_compensation_failure=self._report_orphan,
        )
        context: Dict[str, Any] = {"data": data, "email_redirect_to": email_redirect_to}
        try:
            saga.run(context)
        except SagaFailed as failure:
            raise self._to_api_error(failure)

        logger.info(f"Registered account {context['user_id']}, awaiting email confirmation")
        return RegisterResponse(email_redirect_to=email_redirect_to)

    # Forward steps

    def _check_duplicate_cpf(self, ctx: Dict[str, Any]) -> None:
        result = self.service_client.table(PROFILES_TABLE)\
            .select("id")\
            .eq("cpf", ctx["data"].cpf)\
            .limit(1)\
            .execute()
        if result.data:
            raise ApiError(409, "cpf_exists")

    def _sign_up(self, ctx: Dict[str, Any]) -> None:
        data: RegisterRequest = ctx["data"]
        try:
            auth_response = self.auth_client.auth.sign_up({
                "email": data.email,
                "password": data.password,
                "options": {
                    "data": {
                        "name": data.name,
                        "cpf": data.cpf,
                        "whatsapp": data.whatsapp,
                    },
                    "email_redirect_to": ctx["email_redirect_to"],
                },
            })
        except Exception as e:
            message = _provider_message(e)
            status = getattr(e, "status", None)
            code = classify_signup_error(message, status)
            raise ApiError(signup_error_status(code, status), code, detail=truncate(message))

        user = getattr(auth_response, "user", None)
        user_id = getattr(user, "id", None)
        if not user_id:
            raise ApiError(500, "signup_missing_user_id")
        # With email confirmation on, an existing address comes back as a user without identities
        identities = getattr(user, "identities", None)
        if identities is not None and len(identities) == 0:
            raise ApiError(409, "email_exists", detail="User already registered")
        ctx["user_id"] = user_id

    def _update_profile(self, ctx: Dict[str, Any]) -> None:
        data: RegisterRequest = ctx["data"]
        try:
            # The row itself is created by the on-signup trigger
            result = self.service_client.table(PROFILES_TABLE)\
                .update({"name": data.name, "cpf": data.cpf, "whatsapp": data.whatsapp})\
                .eq("id", ctx["user_id"])\
                .execute()
        except Exception as e:
            raise ApiError(409, "profile_update_failed", detail=truncate(_provider_message(e)))
        if not result.data:
            raise ApiError(409, "profile_update_failed", detail="profile_not_found")

    def _upsert_license(self, ctx: Dict[str, Any]) -> None:
        try:
            self.ledger.upsert_license(ctx["data"].email)
        except LedgerError as e:
            detail = e.detail if isinstance(e.detail, dict) else truncate(e.detail)
            raise ApiError(502, "sheets_failed", detail=detail)

    # Compensation

    def _delete_account(self, ctx: Dict[str, Any]) -> None:
        self.service_client.auth.admin.delete_user(ctx["user_id"])
        logger.warning(f"Rolled back auth account {ctx['user_id']}")

    def _report_orphan(self, step: str, error: Exception, ctx: Dict[str, Any]) -> None:
        logger.critical(
            f"Orphaned auth account {ctx.get('user_id')} for {ctx['data'].email}: "
            f"rollback of '{step}' failed ({error}); it has no license and must be removed by hand"
        )

    def _to_api_error(self, failure: SagaFailed) -> ApiError:
        cause = failure.cause
        if isinstance(cause, ApiError):
            error = cause
        else:
            logger.exception(f"Unexpected error during registration step '{failure.step}'", exc_info=cause)
            error = ApiError(500, "server_error", detail=truncate(str(cause)))
        if failure.rollback_failed:
            error.extra["rollback_failed"] = True
        return error
