"""Policies deciding whether an import path is externally hosted."""

from typing import Callable, Iterable, Optional

# A policy takes a raw import path and returns True if it is external.
Policy = Callable[[str], bool]

PATH_SEPARATOR = "/"


def domain_segment(path: str) -> str:
    """Return the text before the first path separator."""
    return path.split(PATH_SEPARATOR, 1)[0]


def is_external(path: str) -> bool:
    """
    Default policy: a path is external if its first segment contains a dot.

    This matches the ``host.tld/owner/repo`` convention. Standard library
    paths such as ``fmt`` or ``net/http`` have no dot and are discarded.
    A builtin path with a dot in its first segment, or a hosted path
    without one, is misclassified.
    """
    return "." in domain_segment(path)


def registry_policy(registries: Iterable[str]) -> Policy:
    """
    Build a policy that only accepts paths hosted on known registries.

    Args:
        registries: Host names such as "github.com" or "gopkg.in".

    Returns:
        A policy returning True when the domain segment is one of the hosts.
    """
    hosts = frozenset(host.strip().lower() for host in registries if host.strip())

    def _policy(path: str) -> bool:
        return domain_segment(path).lower() in hosts

    return _policy


def get_policy(registries: Optional[Iterable[str]] = None) -> Policy:
    """Return the registry policy if registries are given, else is_external."""
    if registries:
        return registry_policy(registries)
    return is_external
