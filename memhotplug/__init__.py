"""memhotplug — Memory hotplug admission checks for VM specs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("memhotplug")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

from .engine import run_rules, validate_memory_hotplug  # noqa: E402
from .rules.base import CauseType, Violation  # noqa: E402

__all__ = ["run_rules", "validate_memory_hotplug", "CauseType", "Violation", "__version__"]
