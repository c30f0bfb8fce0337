"""DynamoDB-backed implementation of UserRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.config import Config, get_config
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import PersistenceError
from core.repositories.user_repository import UserRepository
from core.utils.constants import ERROR_CODE_USER_LOOKUP_FAILED

logger = Logger(UTC=True)


class DynamoDBUsers(UserRepository):
    """Reads the users table maintained by the authentication service."""

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        config: Config | None = None,
    ) -> None:
        if adapter is None:
            config = config or get_config()
            adapter = DynamoDBAdapter(config.users_table, config)
        self._db: DynamoDBAdapterProtocol = adapter

    def user_exists(self, *, user_id: str) -> bool:
        logger.debug("Looking up user", extra={"user_id": user_id})

        try:
            response = self._db.get_item(key={"user_id": user_id})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"user_id": user_id})
            raise PersistenceError(
                message="Unable to verify user at this time",
                error_code=ERROR_CODE_USER_LOOKUP_FAILED,
                details={"user_id": user_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error looking up user")
            raise PersistenceError(
                message="Unable to verify user at this time",
                error_code=ERROR_CODE_USER_LOOKUP_FAILED,
                details={"user_id": user_id},
            ) from exc

        return response.get("Item") is not None
