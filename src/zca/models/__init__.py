from zca.models.credentials import Credentials
from zca.models.session import FeatureSettings, SessionContext, SessionSettings, ShareFileSettings

__all__ = ["Credentials", "FeatureSettings", "SessionContext", "SessionSettings", "ShareFileSettings"]
