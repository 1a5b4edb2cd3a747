from waff_client.settings.main import GeneralSettings, LogSettings, ServiceSettings

# Always load general settings
general_settings = GeneralSettings()

__all__ = ["GeneralSettings", "LogSettings", "ServiceSettings", "general_settings"]
