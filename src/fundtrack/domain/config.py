"""System configuration service and currency formatting."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import structlog

from fundtrack.database.base import Database
from fundtrack.domain.cache import ViewState
from fundtrack.domain.entities import SystemConfig
from fundtrack.domain.errors import AuthorizationError, ValidationError, not_signed_in
from fundtrack.domain.identity import IdentityProvider, is_administrator
from fundtrack.domain.payloads import ConfigPatch

logger = structlog.get_logger(__name__)

DEFAULT_CURRENCY_SYMBOL = "$"


def format_currency(amount: Decimal | int | float, config: Optional[SystemConfig] = None) -> str:
    """Render an amount in the configured display currency.

    >>> format_currency(Decimal("1234.5"))
    '$1,234.50'
    """
    symbol = config.currency_symbol if config is not None else DEFAULT_CURRENCY_SYMBOL
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


class ConfigService:
    """Service for the organization-wide configuration row."""

    def __init__(self, db: Database, view_state: ViewState, identity: IdentityProvider):
        self.db = db
        self.view_state = view_state
        self.identity = identity

    @property
    def config(self) -> Optional[SystemConfig]:
        return self.view_state.config

    async def load_config(self) -> Optional[SystemConfig]:
        self.view_state.config = await self.db.get_config()
        return self.view_state.config

    async def update_config(self, patch: ConfigPatch) -> SystemConfig:
        """Update configuration fields; administrators only.

        Raises:
            AuthorizationError: If the caller is not an administrator
            ValidationError: If a currency field is blank
        """
        user_id = self.identity.current_identity()
        if user_id is None:
            raise AuthorizationError(not_signed_in())
        if not is_administrator(await self.db.get_user(user_id)):
            raise AuthorizationError("Only administrators can change the configuration")
        for name in ("currency_code", "currency_symbol", "currency_name"):
            value = getattr(patch, name)
            if value is not None and not value.strip():
                raise ValidationError(f"{name.replace('_', ' ').capitalize()} cannot be empty")

        self.view_state.config = await self.db.update_config(patch, updated_by=user_id)
        logger.info("configuration_updated", user_id=user_id)
        return self.view_state.config

    def format_currency(self, amount: Decimal | int | float) -> str:
        return format_currency(amount, self.config)
