"""Settings implementation."""

from typing import Any, Iterator, Mapping, Optional

from .error import SettingsError


class Settings(Mapping[str, Any]):
    """Read-only settings mapping with typed accessors.

    Values are looked up by name; each accessor accepts several alternative
    names and returns the first one defined.
    """

    def __init__(self, values: Mapping[str, Any] = None):
        """Initialize a Settings object.

        Args:
            values: An optional dictionary of settings
        """
        self._values = dict(values or {})

    def get_value(self, *var_names, default: Optional[Any] = None) -> Any:
        """Fetch a setting.

        Args:
            var_names: A list of variable name alternatives
            default: The default value to return if none are defined
        """
        for k in var_names:
            if k in self._values:
                return self._values[k]
        return default

    def get_bool(self, *var_names, default: Optional[bool] = None) -> Optional[bool]:
        """Fetch a setting as a boolean value."""
        value = self.get_value(*var_names, default=default)
        if value is not None:
            value = bool(
                value and str(value).strip().lower() not in ("false", "0", "no", "off")
            )
        return value

    def get_int(self, *var_names, default: Optional[int] = None) -> Optional[int]:
        """Fetch a setting as an integer value."""
        value = self.get_value(*var_names, default=default)
        if value is not None:
            try:
                value = int(value)
            except (TypeError, ValueError) as err:
                raise SettingsError(
                    f"Setting {var_names[0]} must be an integer, got {value!r}"
                ) from err
        return value

    def get_str(self, *var_names, default: Optional[str] = None) -> Optional[str]:
        """Fetch a setting as a string value."""
        value = self.get_value(*var_names, default=default)
        if value is not None:
            value = str(value)
        return value

    def extend(self, other: Mapping[str, Any]) -> "Settings":
        """Merge another mapping to produce a new instance."""
        vals = self._values.copy()
        vals.update(other)
        return Settings(vals)

    def __getitem__(self, index):
        """Fetch as an array index."""
        if not isinstance(index, str):
            raise TypeError(f"Index {index} must be a string")
        if index not in self._values:
            raise KeyError("Undefined index: {}".format(index))
        return self._values[index]

    def __contains__(self, index):
        """Define 'in' operator."""
        return index in self._values

    def __iter__(self) -> Iterator:
        """Iterate settings keys."""
        return iter(self._values)

    def __len__(self):
        """Fetch the length of the mapping."""
        return len(self._values)

    def __repr__(self) -> str:
        """Provide a human readable representation of this object."""
        items = ("{}={}".format(k, self[k]) for k in self)
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))
