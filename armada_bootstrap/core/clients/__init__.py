from armada_bootstrap.core.clients.RemoteCallClient import CallReceipt, RemoteCallClient
from armada_bootstrap.core.clients.Web3CallClient import Web3CallClient

__all__ = [
    "CallReceipt",
    "RemoteCallClient",
    "Web3CallClient",
]
