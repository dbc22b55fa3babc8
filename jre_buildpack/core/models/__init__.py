"""Domain models — memory sizes, versions, configuration and phase receipts."""

from jre_buildpack.core.models.config import JreConfiguration  # noqa: F401
from jre_buildpack.core.models.memory import MemorySize  # noqa: F401
from jre_buildpack.core.models.receipt import CompileReceipt  # noqa: F401
from jre_buildpack.core.models.version import TokenizedVersion  # noqa: F401
