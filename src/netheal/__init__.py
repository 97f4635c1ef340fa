"""
netheal - Network Healing Console
Client data-access and derived-view layer
"""

__version__ = "0.3.0"


def __getattr__(name: str):
    """Lazy import so the CLI stays cheap to start."""
    if name in ("NethealApi", "RequestExecutor"):
        from netheal.client import NethealApi, RequestExecutor

        return locals()[name]

    if name in ("Outcome", "Success", "Failure", "FailureKind"):
        from netheal.client.outcome import Failure, FailureKind, Outcome, Success

        return locals()[name]

    if name in ("QueryDescriptor", "derive", "derive_stats", "percentages"):
        from netheal.views import QueryDescriptor, derive, derive_stats, percentages

        return locals()[name]

    raise AttributeError(f"module 'netheal' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Client
    "NethealApi",
    "RequestExecutor",
    "Outcome",
    "Success",
    "Failure",
    "FailureKind",
    # Views
    "QueryDescriptor",
    "derive",
    "derive_stats",
    "percentages",
]
