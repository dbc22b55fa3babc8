"""
IBM JRE staging — orchestrator, memory heuristics and OOM recovery script.

Re-exports the public surface so callers can write::

    from jre_buildpack.core.services.jre import IBMJdk
"""

from jre_buildpack.core.services.jre.ibm_jdk import IBMJdk  # noqa: F401
from jre_buildpack.core.services.jre.killjava import install_killjava  # noqa: F401
from jre_buildpack.core.services.jre.memory_heuristics import memory_opts  # noqa: F401
from jre_buildpack.core.services.jre.memory_limit import (  # noqa: F401
    MemoryLimit,
    StaticMemoryLimit,
)
