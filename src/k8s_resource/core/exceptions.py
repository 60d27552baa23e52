class K8sResourceError(Exception):
    """Base exception for k8s-resource."""

    pass


class ClusterConnectionError(K8sResourceError):
    """Raised when no Kubernetes configuration can be loaded."""

    pass


class InvalidRequirementError(K8sResourceError, ValueError):
    """Raised when a fit-check requirement is not a non-negative number."""

    pass
