"""Run the operator with ``python -m rgw_user_operator``."""

from __future__ import annotations

import os

import kopf

from . import main as _operator  # noqa: F401


def main() -> None:
    """Start kopf for the configured namespaces, cluster-wide when none are set."""
    namespaces = [ns.strip() for ns in os.getenv("WATCH_NAMESPACES", "").split(",") if ns.strip()]
    kopf.run(
        clusterwide=not namespaces,
        namespaces=namespaces,
        standalone=os.getenv("KOPF_STANDALONE", "false").lower() == "true",
    )


if __name__ == "__main__":
    main()
