"""
Domain Errors
Exception hierarchy shared by the asset data pipeline
"""

from typing import Optional


class AssetDataError(Exception):
    """Base class for all asset data pipeline errors"""


class UnsupportedAssetClassError(AssetDataError):
    """Raised when an asset class tag is not part of the closed set"""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unsupported assetClass: {tag}")


class MarketDataError(AssetDataError):
    """Market data provider failure"""


class MarketDataConfigError(MarketDataError):
    """Market data provider is not configured (missing API key)"""


class MarketDataHTTPError(MarketDataError):
    """Upstream returned a non-2xx status or an unreadable body"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class LLMError(AssetDataError):
    """LLM completion failure"""


class LLMConfigurationError(LLMError):
    """LLM client is not configured (missing API key)"""


class LLMResponseParseError(LLMError):
    """LLM output is not the JSON object we asked for"""
