"""
Version information for simple_logging.

MAJOR/MINOR/PATCH/PHASE are the only values edited on a release;
setup.py reads PIP_VERSION from here, so the installed distribution
and ``simple_logging.__version__`` cannot drift apart.

Formats:
    __version__   0.3.0-beta   (MAJOR.MINOR.PATCH[-PHASE])
    PIP_VERSION   0.3.0b0      (PEP 440)
"""

MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = "beta"  # None, "alpha", "beta", "rc1", ...

__app_name__ = "simple_logging"

_PEP440_PHASES = {"alpha": "a0", "beta": "b0"}


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version():
    """Return the PEP 440 form: 0.3.0-beta -> 0.3.0b0, 0.3.0-rc1 -> 0.3.0rc1."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base += _PEP440_PHASES.get(PHASE, PHASE)
    return base


__version__ = get_base_version()
PIP_VERSION = get_pip_version()
