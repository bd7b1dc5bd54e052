"""Block explorer verification API client and result polling."""

from walletctl.explorer.client import ExplorerClient
from walletctl.explorer.polling import poll_verification_result

__all__ = ["ExplorerClient", "poll_verification_result"]
