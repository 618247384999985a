"""Option Calc SDK - Core functionality for option grant value estimates."""

from .config import (
    # Settings (machine-specific)
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_http_timeout,
    # Grant file
    get_grant_path,
    load_grant_file,
    save_grant_file,
    grant_from_dict,
    load_grant_config,
    get_fallback_price,
    DEFAULT_GRANT,
    # Errors
    ConfigError,
    ConfigNotFoundError,
    GrantConfigError,
)

from .schemas import (
    GrantConfig,
    PriceQuote,
    ProfitBreakdown,
    VestEvent,
)

from .symbols import (
    normalize_symbol,
    currency_symbol,
)

from .quotes import (
    fetch_price,
    fetch_quote,
    parse_quote_response,
    parse_quote_fields,
    QuoteError,
    QuoteNetworkError,
    QuoteParseError,
)

from .vesting import (
    compute_profit,
    completed_anniversaries,
    get_vesting_schedule,
)

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_http_timeout",
    # Grant file
    "get_grant_path",
    "load_grant_file",
    "save_grant_file",
    "grant_from_dict",
    "load_grant_config",
    "get_fallback_price",
    "DEFAULT_GRANT",
    # Errors
    "ConfigError",
    "ConfigNotFoundError",
    "GrantConfigError",
    # Schemas
    "GrantConfig",
    "PriceQuote",
    "ProfitBreakdown",
    "VestEvent",
    # Symbols
    "normalize_symbol",
    "currency_symbol",
    # Quotes
    "fetch_price",
    "fetch_quote",
    "parse_quote_response",
    "parse_quote_fields",
    "QuoteError",
    "QuoteNetworkError",
    "QuoteParseError",
    # Vesting
    "compute_profit",
    "completed_anniversaries",
    "get_vesting_schedule",
]
