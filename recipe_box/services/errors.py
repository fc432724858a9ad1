class ServiceError(Exception):
    status_code = 500


class InvalidRequestError(ServiceError):
    status_code = 400


class ConfigurationError(ServiceError):
    status_code = 400


class SettingsNotFoundError(ConfigurationError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__("User settings not found.")
        self.user_id = user_id


class ApiKeyNotConfiguredError(ConfigurationError):
    def __init__(self, provider: str):
        label = "Gemini" if provider == "gemini" else "OpenAI"
        super().__init__(
            f"{label} APIキーが設定されていません。設定ページでAPIキーを登録してください。"
        )
        self.provider = provider


class UnsupportedOperationError(ServiceError):
    status_code = 501


class FetchError(ServiceError):
    pass


class EmptyContentError(ServiceError):
    status_code = 404

    def __init__(self, url: str):
        super().__init__("Could not retrieve content from the URL.")
        self.url = url


class ExtractionError(ServiceError):
    pass


class ClassificationError(ServiceError):
    pass


class UnrecognizedContentError(ServiceError):
    status_code = 400


class PromptLoadError(ServiceError):
    pass
