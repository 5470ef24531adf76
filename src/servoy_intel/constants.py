"""
Shared constants for the Servoy script intelligence core.
"""

# Directory and file names
CACHE_DIR = "servoy-intel-cache"
GLOBALS_CACHE_FOLDER = "globals"
SOLUTIONS_CACHE_FOLDER = "solutions"
GLOBALS_FILE = "globals.js"
SETTINGS_FILE = "solution_settings.obj"
SCRIPT_EXTENSION = ".js"
CATALOG_FILE = "platform_catalog.json"

# Reserved catalog entry replaced by the project's merged globals
GLOBALS_OBJECT = "globals"

# Placeholder texts for declarations without doc comments
NO_VARIABLE_DESCRIPTION = "No description provided for this variable"
NO_FUNCTION_DESCRIPTION = "No description provided for this function / method"
NO_CLASS_DESCRIPTION = "No description provided for this class"
NO_PARAM_DESCRIPTION = "No description provided for this parameter"
NO_OBJECT_DESCRIPTION = "no description"

DIAGNOSTIC_SOURCE = "servoy-intel"

# Centralized filtering configuration for project scans
FILTER_CONFIG = {
    "exclude_directories": {
        # Version control
        '.git', '.svn', '.hg', '.bzr',

        # Package managers & dependencies
        'node_modules', '__pycache__', '.venv', 'venv',
        'bower_components',

        # Build outputs
        'dist', 'build', 'target', 'out', 'bin',

        # IDE & editors
        '.idea', '.vscode', '.vs', '.settings',

        # Testing & coverage
        '.pytest_cache', '.coverage', '.tox', '.nyc_output',
        'coverage', 'htmlcov',
    },

    "exclude_files": {
        # Temporary files
        '*.tmp', '*.temp', '*.swp', '*.swo',

        # Backup files
        '*.bak', '*~', '*.orig',

        # Bundled or generated scripts
        '*.min.js',
    },
}
