"""
Default security policy resolver.

Turns the list of operations a service marks as secured into the OpenAPI
``security`` array for one operation.
"""

from typing import Any, Dict, List, Optional

from .constants import SECURITY_ALL


def security(
    operation_name: str,
    securities: Optional[List[str]],
    security_requirements: Any,
) -> List[Dict[str, Any]]:
    """
    Resolve the security requirements for ``operation_name``.

    Args:
        operation_name: Canonical operation name (``find``, ``patchMulti``, ...)
            or the method name of a custom operation
        securities: Operation names the service wants secured; ``"all"``
            secures every operation
        security_requirements: A Security Requirement Object or a list of them

    Returns:
        A fresh list of requirement objects, empty when the operation is open.
    """
    if not securities or not security_requirements:
        return []
    if operation_name not in securities and SECURITY_ALL not in securities:
        return []
    if isinstance(security_requirements, dict):
        return [dict(security_requirements)]
    return [dict(requirement) for requirement in security_requirements]
