"""Root of the family lifecycle exception hierarchy."""


class FamilyLifecycleError(Exception):
    """Base for every dissolution and self-removal error.

    Catching this catches protocol violations raised by the backend and
    classified failures raised by the orchestrators, but never programming
    errors such as ``TypeError``.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
