"""Link configuration.

LinkConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LinkConfig:
    """Link configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LinkConfig(context_path="/shop", quote_values=True)
    """

    # Prefix for every generated link (e.g. "/app" when mounted below root)
    context_path: str = ""

    # Percent-encode generated path values and query pairs. Off by default:
    # values are emitted verbatim.
    quote_values: bool = False

    # Concurrent interceptor runs allowed at once. 0 = 8 x CPU count.
    interceptor_permits: int = 0

    # Path or query parameter that selects the controller action
    action_param: str = "action"

    def __post_init__(self) -> None:
        if self.interceptor_permits < 0:
            msg = f"interceptor_permits must be >= 0, got {self.interceptor_permits}"
            raise ValueError(msg)
        if self.context_path.endswith("/"):
            object.__setattr__(self, "context_path", self.context_path.rstrip("/"))

    @property
    def permits(self) -> int:
        """Resolved interceptor permit ceiling."""
        if self.interceptor_permits:
            return self.interceptor_permits
        return 8 * (os.cpu_count() or 1)
