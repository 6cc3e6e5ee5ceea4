"""
User-facing (pt-BR) messages for the error codes returned by the API.

The browser forms show these directly; unknown codes fall back to a generic
"try again" message.
"""

from typing import Optional

GENERIC_MESSAGE = "Não foi possível concluir a operação. Tente novamente."

MESSAGES = {
    "missing_fields": "Preencha os campos obrigatórios.",
    "invalid_fields": "Verifique os dados informados e tente novamente.",
    "invalid_document": "CPF/CNPJ inválido.",
    "cpf_exists": "Este CPF/CNPJ já está cadastrado.",
    "email_exists": "Este e-mail já está cadastrado.",
    "weak_password": "Senha inválida. Verifique os requisitos e tente novamente.",
    "rate_limited": "Muitas tentativas. Aguarde um pouco e tente novamente.",
    "auth_error": "Não foi possível concluir o cadastro. Verifique os dados e tente novamente.",
    "profile_update_failed": "Não foi possível concluir o cadastro. Verifique os dados e tente novamente.",
    "sheets_failed": "Cadastro indisponível no momento. Tente novamente em instantes.",
    "signup_missing_user_id": "Cadastro indisponível no momento. Tente novamente em instantes.",
    "recover_failed": "Falha ao solicitar redefinição. Tente novamente.",
    "no_token": "Sessão expirada. Faça login novamente.",
    "invalid_session": "Sessão expirada. Faça login novamente.",
    "n8n_error": "Erro de conexão com o servidor. Tente novamente.",
    "method_not_allowed": "Método não permitido.",
    "not_found": "Recurso não encontrado.",
    "missing_app": "Aplicativo não informado.",
    "unknown_app": "Aplicativo desconhecido.",
}

# Identity provider free text -> friendly message, checked in order
AUTH_MESSAGE_PATTERNS = (
    ("already registered", MESSAGES["email_exists"]),
    ("invalid email", "E-mail inválido."),
    ("password", MESSAGES["weak_password"]),
    ("rate", MESSAGES["rate_limited"]),
    ("too many", MESSAGES["rate_limited"]),
)


def friendly_auth_message(detail: Optional[str]) -> str:
    text = str(detail or "").lower()
    for pattern, message in AUTH_MESSAGE_PATTERNS:
        if pattern in text:
            return message
    return MESSAGES["auth_error"]


def message_for(error: str, detail: Optional[str] = None) -> str:
    if error == "auth_error" and detail:
        return friendly_auth_message(detail)
    return MESSAGES.get(error, GENERIC_MESSAGE)
