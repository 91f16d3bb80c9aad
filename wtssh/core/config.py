"""
Flat configuration store with dotted property names
"""
from typing import Any, Dict, Iterator, Optional


_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0")


class Configuration:
    """
    Property view over merged configuration sources.
    
    Keys are dotted names such as ``webtunnel.connectTimeout``. Values keep
    the type they were loaded with; typed getters convert on access.
    """
    
    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})
    
    def __contains__(self, key: str) -> bool:
        return key in self._values
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._values)
    
    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value
    
    def update(self, values: Dict[str, Any]) -> None:
        self._values.update(values)
    
    def get_string(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
    
    def get_int(self, key: str, default: int = 0) -> int:
        """
        Get integer property.
        
        Raises:
            ValueError: If the stored value is not an integer
        """
        value = self._values.get(key)
        if value is None or value == "":
            return default
        if isinstance(value, bool):
            raise ValueError(f"Property {key} is not an integer: {value}")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"Property {key} is not an integer: {value}")
            return int(value)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Property {key} is not an integer: {value}") from e
    
    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Get boolean property.
        
        Raises:
            ValueError: If the stored value is not a boolean
        """
        value = self._values.get(key)
        if value is None or value == "":
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ValueError(f"Property {key} is not a boolean: {value}")
