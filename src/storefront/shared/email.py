"""Structural email address checks used by orders and users."""

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(address: str | None) -> bool:
    """True when ``address`` has one ``@``, a dotted domain and no forbidden characters."""
    if not address or any(ch.isspace() for ch in address):
        return False
    if address.count("@") != 1:
        return False

    local_part, domain_part = address.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in address:
        return False
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False
    return not any(ch in address for ch in _FORBIDDEN)
