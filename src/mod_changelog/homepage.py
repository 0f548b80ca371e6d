"""
Homepage validation against the hosts a changelog may link to.
"""

from urllib.parse import urlsplit

VALID_HOSTS = frozenset(
    {
        "github.com",
        "forum.kerbalspaceprogram.com",
        "kerbaltek.com",
        "KerbalX.com",
        "spacedock.info",
        "kerbokatz.github.io",
        "krpc.github.io",
        "genhis.github.io",
        "snjo.github.io",
        "www.curseforge.com",
        "ksp.sarbian.com",
    }
)

# Hostnames are case-insensitive; compare on the lowered form.
_VALID_HOSTS_LOWER = frozenset(host.lower() for host in VALID_HOSTS)


def homepage_url(homepage: str) -> str:
    """Homepages are stored without a scheme and opened over https."""
    return "https://" + homepage


def homepage_host(homepage: str) -> str | None:
    """Return the host part of a scheme-less homepage, or None if unparseable."""
    if not homepage or not homepage.strip():
        return None
    try:
        host = urlsplit(homepage_url(homepage.strip())).hostname
    except ValueError:
        return None
    return host or None


def validate_homepage(homepage: str | None) -> bool:
    """True only for a non-empty homepage whose host is on the allow-list."""
    if not homepage:
        return False
    host = homepage_host(homepage)
    return host is not None and host.lower() in _VALID_HOSTS_LOWER
