"""Version information for poeditor-sync."""

__version__ = "1.2.0"
__author__ = "poeditor-sync contributors"
__description__ = "Sync POEditor terms with a Swift localization enum and download exports"

# Changelog:
# 1.2.0 - Download pipeline hardening
#       - Exports are written atomically (temp file + rename)
#       - Optional backup of the existing destination (--backup)
#       - Export URL accepted from either "result" or "data" envelope
#
# 1.1.0 - Configuration file and structured logging
#       - .poeditor.yml with project/upload/download/client sections
#       - POEDITOR_API_TOKEN / POEDITOR_PROJECT_ID environment overrides
#       - --verbose, --quiet and --log-file flags
#       - JSON sync report (--output)
#       - --dry-run for upload
#
# 1.0.0 - Initial release
#       - upload: sync terms from a Swift enum (insertions and optional removals)
#       - download: export a language as apple_strings, key_value_json and more
#       - Partial failure detection from POEditor's parsed/added/deleted counts
