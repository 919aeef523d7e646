"""Version information for lproj-sync."""

__version__ = "0.4.0"
__author__ = "lproj-sync contributors"
__description__ = "Project app config locales into iOS .lproj files and the Xcode project"

# Changelog:
# 0.4.0 - Xcode project writer
#        - Objects grouped into isa sections with Begin/End markers
#        - Object references annotated with display-name comments
#        - PBXBuildFile and PBXFileReference written on a single line
#        - InfoPlist.strings added to the Resources build phase
#
# 0.3.0 - Config validation
#        - ConfigValidationError and ConfigValidationWarning classes
#        - Locale code check for .lproj directory names (en, pt-BR, zh-Hans, Base)
#        - Missing locale JSON files reported as config warnings
#        - app.json support (expo wrapper unwrapped)
#
# 0.2.0 - Warning aggregator
#        - Per-locale warnings deduplicated by tag
#        - Warnings drained by the CLI after each run
#
# 0.1.0 - Initial release
#        - Inline and file-referenced locales resolved into one table
#        - InfoPlist.strings written for every locale
#        - Xcode group tree updated without duplicate entries
