"""Validation errors raised by the vault services.

The message text is part of the HTTP contract: clients match on it exactly.
"""


class VaultError(Exception):
    """Base class for user-facing vault validation failures"""


class VaultNotFoundError(VaultError):
    """The requested path is missing or is not a directory"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Directory does not exist: {path}")


class NotAVaultError(VaultError):
    """The directory has no .obsidian directory and no notes"""

    def __init__(self, path):
        self.path = path
        super().__init__(
            "Directory does not appear to be a vault: "
            "no .obsidian directory and no .md files found"
        )


class NoVaultConnectedError(VaultError):
    """An operation needs a connected vault but none is connected"""

    def __init__(self):
        super().__init__("No vault connected")
