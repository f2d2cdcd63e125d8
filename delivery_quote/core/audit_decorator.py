import logging
from functools import wraps
from typing import Callable
from delivery_quote.core.enums import AuditAction
from delivery_quote.utils.hashing import payload_hash

logger = logging.getLogger(__name__)


def audit_log(action: AuditAction) -> Callable:

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            current_user = kwargs.get("current_user")
            if not current_user:
                return result

            try:
                payload = None
                for key in ["payload", "changes", "data", "body"]:
                    if key in kwargs:
                        payload = kwargs[key]
                        break

                if hasattr(payload, "model_dump"):
                    payload_dict = payload.model_dump(exclude_unset=True)
                elif isinstance(payload, dict):
                    payload_dict = payload
                else:
                    payload_dict = {}

                logger.info(
                    f"audit action={action} user={current_user['username']} "
                    f"payload_hash={payload_hash(payload_dict)}"
                )
            except Exception as e:
                logger.error(f"Audit logging failed for {action}: {e}")

            return result

        return wrapper
    return decorator
