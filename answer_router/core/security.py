from answer_router.core.errors import CredentialMissingError


def require_api_key(key: str | None, env_name: str) -> str:
    if not key or not key.strip():
        raise CredentialMissingError(f"{env_name} is not set")
    return key.strip()


def mask_key(key: str | None) -> str:
    if not key:
        return ""
    if len(key) <= 8:
        return "***"
    return f"{key[:4]}...{key[-4:]}"
