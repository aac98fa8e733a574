"""
Setting store access. The fee calculation method is read here and passed
explicitly into the fee calculator by callers.
"""
import logging

from core.models import Setting

logger = logging.getLogger(__name__)

FEE_METHOD_SETTING_KEY = "fee_calculation_method"

FEE_METHOD_PER_SESSION = "PER_SESSION"
FEE_METHOD_PER_CYCLE = "PER_CYCLE"
FEE_METHODS = (FEE_METHOD_PER_SESSION, FEE_METHOD_PER_CYCLE)
DEFAULT_FEE_METHOD = FEE_METHOD_PER_SESSION


def get_setting(key, default=None):
    """Return the stored value for key, or default when absent."""
    value = Setting.objects.filter(key=key).values_list("value", flat=True).first()
    return default if value is None else value


def set_setting(key, value, description=None):
    """Create or update a setting (last write wins)."""
    defaults = {"value": value}
    if description is not None:
        defaults["description"] = description
    setting, created = Setting.objects.update_or_create(key=key, defaults=defaults)
    logger.info(f"[settings] {'Created' if created else 'Updated'} {key}={value}")
    return setting


def get_fee_calculation_mode():
    """PER_SESSION | PER_CYCLE; unknown stored values fall back to PER_SESSION."""
    value = get_setting(FEE_METHOD_SETTING_KEY, DEFAULT_FEE_METHOD)
    if value not in FEE_METHODS:
        logger.warning(f"[settings] Unknown fee method {value!r}, using {DEFAULT_FEE_METHOD}")
        return DEFAULT_FEE_METHOD
    return value


def set_fee_calculation_mode(mode):
    if mode not in FEE_METHODS:
        raise ValueError(f"Invalid fee calculation method: {mode}")
    return set_setting(
        FEE_METHOD_SETTING_KEY,
        mode,
        description="Phương pháp tính học phí (PER_SESSION hoặc PER_CYCLE)",
    )
