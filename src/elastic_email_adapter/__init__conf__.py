"""Static package metadata and layered-configuration identifiers.

Kept free of imports so that build tooling can read it without
installing the runtime dependencies.
"""

from __future__ import annotations

name = "elastic_email_adapter"
title = "Elastic Email wire adapter: message transformation and repeated-key form codec"
version = "1.1.1"
homepage = "https://github.com/KineticCafe/elastic-email-adapter"
author = "Kinetic Commerce"
author_email = "dev@kineticcommerce.com"

# Identifiers used by lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "KineticCommerce"
LAYEREDCONF_APP = "Elastic Email Adapter"
LAYEREDCONF_SLUG = "elastic-email-adapter"


def print_info() -> None:
    """Print the package metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for elastic_email_adapter:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
