class TokenLookupError(Exception):
    pass


class InvalidAddressFormatError(TokenLookupError, ValueError):
    pass


class LedgerReadError(TokenLookupError):
    pass


class RpcTransportError(LedgerReadError):
    pass


class AccountNotFoundError(LedgerReadError):
    pass


class InvalidAccountLayoutError(LedgerReadError):
    pass


class InvalidMintLayoutError(InvalidAccountLayoutError):
    pass


class InvalidMetadataLayoutError(InvalidAccountLayoutError):
    pass


class OffChainFetchError(TokenLookupError):
    pass


class DnsLookupError(TokenLookupError):
    pass
