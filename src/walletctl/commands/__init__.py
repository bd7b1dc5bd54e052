from walletctl.commands.transfer import transfer_command
from walletctl.commands.verify import verify_command

__all__ = ["transfer_command", "verify_command"]
