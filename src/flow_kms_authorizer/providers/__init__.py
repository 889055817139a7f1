from flow_kms_authorizer.providers.base import KMSProvider
from flow_kms_authorizer.providers.google import GoogleKMSProvider

__all__ = ["GoogleKMSProvider", "KMSProvider"]
