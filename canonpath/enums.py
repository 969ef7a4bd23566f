from enum import Enum
import os
from typing import Optional, Union

from .exceptions import InvalidConfigurationException


class ExistenceMode(str, Enum):
    """Enumeration of how strictly the final path component must exist.

    Attributes:
        exact (str): The final component must exist; a missing one fails the resolution.
        missing_ok (str): A missing final component is tolerated and returned literally.
            Missing intermediate components always fail.

    Modes can be passed to `abspath` / `Resolver.resolve` or set with the
    `CANONPATH_EXISTENCE_MODE` environment variable.
    """

    exact = "exact"
    missing_ok = "missing_ok"  # DEFAULT

    @classmethod
    def from_environment(cls) -> Optional["ExistenceMode"]:
        """Parses the environment variable `CANONPATH_EXISTENCE_MODE` into
        an instance of this Enum.

        Returns:
            ExistenceMode enum value if the env var is defined, else None.
        """

        env_string = os.environ.get("CANONPATH_EXISTENCE_MODE", "").lower()

        if not env_string:
            return None

        try:
            return cls(env_string)
        except ValueError:
            raise InvalidConfigurationException(
                f"CANONPATH_EXISTENCE_MODE must be one of {[m.value for m in cls]}, "
                f"got {env_string!r}."
            )

    @classmethod
    def coerce(cls, exact: Union[None, bool, str, "ExistenceMode"]) -> "ExistenceMode":
        """Normalize the `exact` argument accepted by the public functions."""
        if exact is None:
            return cls.from_environment() or cls.missing_ok
        if isinstance(exact, bool):
            return cls.exact if exact else cls.missing_ok
        return cls(exact)
