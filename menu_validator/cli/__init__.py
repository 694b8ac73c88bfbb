"""
Menu Validator CLI - command-line interface.

Commands:
- validate: Fetch menus and report valid and invalid paths
- config: Show or change the stored configuration
"""
