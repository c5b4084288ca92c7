"""
family_lifecycle - Consent-gated account lifecycle for shared family accounts

Two destructive operations on a shared family account:
- Family dissolution: every co-guardian acknowledges, then a cooling period
  runs before irreversible deletion. Cancellable until it completes.
- Guardian self-removal: one guardian leaves immediately and unilaterally.
  Cannot be cancelled, cannot be applied twice.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
