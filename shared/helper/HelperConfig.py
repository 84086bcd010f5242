"""Central configuration helper for the content index bridge."""

import logging
import os


class HelperConfig:
    """Central configuration helper. Reads all settings from environment variables."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _get_raw_val(self, key: str) -> str | None:
        """Return the stripped raw value of an environment variable, or None if unset or blank."""
        raw = os.getenv(key.upper()) or None  # empty string → None
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Returns:
            str: The resolved value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        val = self._get_raw_val(key)
        if val is None and default is None:
            raise ValueError(f"Environment variable '{key.upper()}' is not set.")
        return val if val is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (float | int | None): Fallback value if the variable is not set.

        Returns:
            float | int: The resolved numeric value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        raw = self._get_raw_val(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        """Read a boolean environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (bool | None): Fallback value if the variable is not set.

        Returns:
            bool: The resolved boolean value.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        raw = self._get_raw_val(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        return raw.lower() in ("true", "1", "yes")

    def get_list_val(self, key: str, default: list | None = None, separator: str = ",", element_type: type = str) -> list:
        """Read a list environment variable in the syntax "[elem1,elem2,...]".

        Args:
            key (str): Environment variable name (case-insensitive).
            default (list | None): Fallback value if the variable is not set.
            separator (str): The delimiter between the elements.
            element_type (type): The type to which each element should be cast.

        Returns:
            list: The resolved list of elements. Blank elements are dropped.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value is not wrapped in brackets or an element cannot be cast.
        """
        raw_val = self._get_raw_val(key)
        if raw_val is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default

        if not raw_val.startswith("[") or not raw_val.endswith("]"):
            raise ValueError(f"Environment variable '{key.upper()}' must be in the format '[elem1{separator}elem2{separator}...]'. Got: '{raw_val}'")
        elements = [v.strip() for v in raw_val[1:-1].split(separator) if v.strip()]
        if not elements:
            return []

        try:
            return [element_type(elem) for elem in elements]
        except ValueError as e:
            raise ValueError(f"Environment variable '{key.upper()}' contains invalid elements: {e}. Type set to {element_type.__name__}. Got: '{raw_val}'")

    def get_mapping_val(self, key: str, default: dict[str, str] | None = None, separator: str = ",", pair_separator: str = ":") -> dict[str, str]:
        """Read a mapping environment variable in the syntax "[key1:val1,key2:val2]".

        Args:
            key (str): Environment variable name (case-insensitive).
            default (dict[str, str] | None): Fallback value if the variable is not set.
            separator (str): The delimiter between the pairs.
            pair_separator (str): The delimiter between key and value of a pair.

        Returns:
            dict[str, str]: The resolved mapping, in declaration order.

        Raises:
            ValueError: If a pair is malformed or a key is declared twice.
        """
        pairs = self.get_list_val(key, default=[] if default is not None else None, separator=separator)
        if not pairs and default is not None:
            return default

        mapping: dict[str, str] = {}
        for pair in pairs:
            map_key, sep, map_val = pair.partition(pair_separator)
            map_key, map_val = map_key.strip(), map_val.strip()
            if not sep or not map_key or not map_val:
                raise ValueError(f"Environment variable '{key.upper()}' contains an invalid pair '{pair}'. Expected 'key{pair_separator}value'.")
            if map_key in mapping:
                raise ValueError(f"Environment variable '{key.upper()}' declares key '{map_key}' more than once.")
            mapping[map_key] = map_val
        return mapping

    def get_logger(self) -> logging.Logger:
        """Return the application logger.

        Returns:
            logging.Logger: The configured logger instance.
        """
        return self._logger
