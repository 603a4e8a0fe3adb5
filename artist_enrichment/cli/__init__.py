# =============================================================================
# artist_enrichment/cli/__init__.py: CLI Module Overview
# =============================================================================
#
# Command-line access to the enrichment service for operators who want to
# check what MusicBrainz and Wikipedia return for a name, or backfill a batch
# of exported records, without going through the concert app.
#
#   1. INSPECT (enrich.py inspect)
#      Dry run.  Resolves each name through the same directory lookup and
#      summary chain that enrichment uses, prints a report and a summary
#      table.  Downloads nothing and writes nothing.
#
#   2. ENRICH  (enrich.py enrich)
#      Loads a JSON list of artist records, enriches the ones that have no
#      data yet (or all of them with --force, which starts from a clean
#      slate), stores images under the public directory and writes the
#      records back.
#
# Architecture Notes:
#   - argparse only; the command is small enough not to need Click.
#   - Logs go to stderr so stdout carries only the report (or JSON).
#   - The service graph is built per invocation from load_settings(), so
#     config/config.yaml and the environment apply exactly as in the app.
# =============================================================================

"""CLI tools for artist enrichment.

- ``python -m artist_enrichment.cli inspect NAME...`` -- dry-run lookup
- ``python -m artist_enrichment.cli enrich RECORDS.json`` -- batch enrichment
"""
