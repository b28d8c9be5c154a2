"""Interactive git branch switcher.

Features:
- Fuzzy search over local branches, most recently committed first
- Numbered list of recently checked out branches and commits
- Columns fitted to the terminal width
"""

__version__ = "0.1.0"
