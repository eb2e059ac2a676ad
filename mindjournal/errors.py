class AuthError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = str(message)
        self.status_code = status_code


class StoreError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = str(message)
        self.status_code = status_code


class NotConnectedError(StoreError):
    """API_BASE_URL or API_KEY is missing, so nothing can reach the backend."""


class ValidationError(Exception):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(f"{err.field}: {err.message}" for err in self.errors))


# Ordered: the first matching fragment wins.
MESSAGE_RULES = [
    (
        "Invalid login credentials",
        {
            "ja": "メールアドレスまたはパスワードが正しくありません",
            "en": "Incorrect email address or password.",
        },
    ),
    (
        "Email not confirmed",
        {
            "ja": "メールアドレスの確認が完了していません",
            "en": "Your email address has not been confirmed yet.",
        },
    ),
    (
        "Too many requests",
        {
            "ja": "リクエストが多すぎます。しばらく待ってから再試行してください",
            "en": "Too many attempts. Please wait a moment and try again.",
        },
    ),
    (
        "User already registered",
        {
            "ja": "このメールアドレスは既に登録されています",
            "en": "This email address is already registered.",
        },
    ),
    (
        "Password should be at least 6 characters",
        {
            "ja": "パスワードは6文字以上で入力してください",
            "en": "Password must be at least 6 characters.",
        },
    ),
    (
        "Unable to validate email address",
        {
            "ja": "メールアドレスの形式が正しくありません",
            "en": "The email address format is invalid.",
        },
    ),
    (
        "Missing or expired session",
        {
            "ja": "セッションの有効期限が切れました。再度サインインしてください",
            "en": "Your session has expired. Please sign in again.",
        },
    ),
    (
        "not configured",
        {
            "ja": "バックエンドに接続されていません。API_BASE_URL と API_KEY を設定してください",
            "en": "Not connected to the backend. Set API_BASE_URL and API_KEY.",
        },
    ),
    (
        "Failed to fetch",
        {
            "ja": "ネットワーク接続を確認してください",
            "en": "Please check your network connection.",
        },
    ),
    (
        "does not exist",
        {
            "ja": "データベースのテーブルが見つかりません。バックエンドの設定を確認してください",
            "en": "A database table is missing. Check the backend configuration.",
        },
    ),
    (
        "permission denied",
        {
            "ja": "この操作を行う権限がありません",
            "en": "You do not have permission to do that.",
        },
    ),
    (
        "not found",
        {
            "ja": "データが見つかりません",
            "en": "The requested item could not be found.",
        },
    ),
]


def user_message(exc, language="ja"):
    if isinstance(exc, ValidationError):
        return "\n".join(err.message for err in exc.errors)
    text = getattr(exc, "message", None) or str(exc)
    lowered = text.lower()
    for fragment, messages in MESSAGE_RULES:
        if fragment.lower() in lowered:
            return messages.get(language) or messages["en"]
    return text
