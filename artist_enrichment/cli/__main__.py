# =============================================================================
# artist_enrichment/cli/__main__.py: Package Entry Point
# =============================================================================
#
# Enables ``python -m artist_enrichment.cli <command>``; both subcommands
# live in enrich.py.
# =============================================================================

"""Allow ``python -m artist_enrichment.cli`` execution."""

from artist_enrichment.cli.enrich import main

main()
