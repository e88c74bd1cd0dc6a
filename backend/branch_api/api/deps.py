from fastapi import Depends

from ..core.security import get_current_admin, get_current_active_user
from ..core.clock import Clock, get_clock
from ..core.locale import get_locale


def get_active_admin(current_user=Depends(get_current_admin)):
    return current_user


def get_active_user(current_user=Depends(get_current_active_user)):
    return current_user


__all__ = ["Clock", "get_active_admin", "get_active_user", "get_clock", "get_locale"]
