"""
Named waits used while driving the INV24 UI.

INV24 gives no reliable "ready" signal after adding a row or saving a
form, so the workflows pause for fixed intervals. These values are a known
fragility; tune them per deployment through the ``timeouts`` object of the
configuration file instead of editing code.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Timings:
    """
    Timeouts and settle pauses, in seconds.

    Attributes:
        login_confirmation: Max wait for the post-login URL
        network_idle: Max wait for a page to go quiet after navigation
        element: Default max wait when locating form fields
        listing_lookup: Max wait when looking for a row in the invoice list
        row_settle: Pause after committing a line item row
        submit_settle: Pause after saving the invoice form
        send_settle: Pause after triggering a send
    """

    login_confirmation: float = 15.0
    network_idle: float = 30.0
    element: float = 10.0
    listing_lookup: float = 5.0
    row_settle: float = 0.5
    submit_settle: float = 3.0
    send_settle: float = 2.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or value < 0:
                raise ValueError(
                    f"timeout '{f.name}' must be a non-negative number, got: {value!r}"
                )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Timings":
        """
        Build timings from a (partial) mapping of overrides.

        Unknown keys are rejected so that a typo in the configuration file
        does not silently leave the default in place.

        Examples:
            >>> Timings.from_dict({"submit_settle": 5}).submit_settle
            5
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown timeout keys: {', '.join(unknown)}")

        return cls(**data)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def instant(cls) -> "Timings":
        """Zero pauses and short lookups, for tests and dry runs."""
        return cls(
            login_confirmation=1.0,
            network_idle=1.0,
            element=1.0,
            listing_lookup=1.0,
            row_settle=0.0,
            submit_settle=0.0,
            send_settle=0.0,
        )
