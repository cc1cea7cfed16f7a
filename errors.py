# errors.py
"""Exception taxonomy shared by the parsers, the provider layer and the app.

Every error carries the HTTP status the Flask layer answers with.
"""


class QuizError(Exception):
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidRequest(QuizError):
    status_code = 400


# ===== provider output =====

class ParseError(QuizError):
    """Raw output holds no recognizable table / JSON structure."""
    status_code = 502


class MalformedResponse(ParseError):
    """Cleaned provider text that still failed to parse as JSON."""

    def __init__(self, cleaned_text: str, reason: str):
        super().__init__(f"Malformed JSON response from provider: {reason}")
        self.cleaned_text = cleaned_text
        self.reason = reason


class InvalidShape(QuizError):
    """Structure is present but breaks the question schema."""
    status_code = 502


# ===== provider selection =====

class ProviderError(QuizError):
    status_code = 503


class UnsupportedProvider(ProviderError):
    status_code = 400

    def __init__(self, provider_type):
        super().__init__(f"Unsupported provider type: {provider_type}")
        self.provider_type = provider_type


class ProviderUnavailable(ProviderError):
    def __init__(self, provider_type):
        super().__init__(f"Provider {provider_type} is not available (missing configuration)")
        self.provider_type = provider_type


class NoProviderAvailable(ProviderError):
    def __init__(self, message: str = "No AI provider is configured"):
        super().__init__(message)


class ProviderRequestError(ProviderError):
    status_code = 502


# ===== storage / documents =====

class QuizNotFound(QuizError):
    status_code = 404

    def __init__(self, quiz_id):
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class DocumentNotFound(QuizError):
    status_code = 404

    def __init__(self, document_id):
        super().__init__(f"Document with ID {document_id} not found")
        self.document_id = document_id


class UnsupportedFileType(QuizError):
    status_code = 400


class ExtractionError(QuizError):
    status_code = 422
