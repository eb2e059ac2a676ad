TEXT = {
    "tagline": {"ja": "毎日の気持ちを記録しよう", "en": "Capture how you feel, every day."},
    "sign_in": {"ja": "サインイン", "en": "Sign in"},
    "sign_up": {"ja": "新規登録", "en": "Sign up"},
    "sign_out": {"ja": "サインアウト", "en": "Sign out"},
    "email": {"ja": "メールアドレス", "en": "Email"},
    "password": {"ja": "パスワード", "en": "Password"},
    "confirm_password": {"ja": "パスワード（確認）", "en": "Confirm password"},
    "full_name": {"ja": "氏名", "en": "Full name"},
    "confirmation_code": {"ja": "確認コード", "en": "Confirmation code"},
    "confirm": {"ja": "確認する", "en": "Confirm"},
    "confirmation_sent": {
        "ja": "確認コードを発行しました。コードを入力して登録を完了してください",
        "en": "A confirmation code was issued. Enter it to finish signing up.",
    },
    "not_connected": {
        "ja": "バックエンドに接続されていません。API_BASE_URL と API_KEY を設定してください",
        "en": "Not connected to the backend. Set API_BASE_URL and API_KEY.",
    },
    "tab_dashboard": {"ja": "ダッシュボード", "en": "Dashboard"},
    "tab_write": {"ja": "日記を書く", "en": "Write"},
    "tab_entries": {"ja": "日記一覧", "en": "Entries"},
    "tab_calendar": {"ja": "カレンダー", "en": "Calendar"},
    "tab_settings": {"ja": "設定", "en": "Settings"},
    "total_entries": {"ja": "総エントリー数", "en": "Total entries"},
    "average_emotion": {"ja": "平均感情スコア", "en": "Average emotion"},
    "streak_days": {"ja": "連続記録日数", "en": "Day streak"},
    "top_tags": {"ja": "よく使うタグ", "en": "Top tags"},
    "emotion_trend": {"ja": "感情の推移", "en": "Emotion trend"},
    "recent_entries": {"ja": "最近の日記", "en": "Recent entries"},
    "no_entries": {"ja": "まだ日記がありません", "en": "No entries yet."},
    "title": {"ja": "タイトル", "en": "Title"},
    "content": {"ja": "内容", "en": "Content"},
    "emotion_score": {"ja": "感情スコア", "en": "Emotion score"},
    "tags": {"ja": "タグ（カンマ区切り）", "en": "Tags (comma separated)"},
    "save": {"ja": "保存", "en": "Save"},
    "saved": {"ja": "保存しました", "en": "Saved."},
    "edit": {"ja": "編集", "en": "Edit"},
    "delete": {"ja": "削除", "en": "Delete"},
    "cancel": {"ja": "キャンセル", "en": "Cancel"},
    "deleted": {"ja": "削除しました", "en": "Deleted."},
    "confirm_delete": {"ja": "本当に削除しますか？", "en": "Delete this permanently?"},
    "search": {"ja": "検索", "en": "Search"},
    "events_on": {"ja": "の予定", "en": "events"},
    "no_events": {"ja": "予定はありません", "en": "No events."},
    "new_event": {"ja": "予定を追加", "en": "New event"},
    "description": {"ja": "説明", "en": "Description"},
    "location": {"ja": "場所", "en": "Location"},
    "start": {"ja": "開始", "en": "Start"},
    "end": {"ja": "終了", "en": "End"},
    "all_day": {"ja": "終日", "en": "All day"},
    "notify": {"ja": "通知する", "en": "Remind me"},
    "minutes_before": {"ja": "通知（分前）", "en": "Minutes before"},
    "previous": {"ja": "前の月", "en": "Previous"},
    "next": {"ja": "次の月", "en": "Next"},
    "today": {"ja": "今日", "en": "Today"},
    "selected_day": {"ja": "日付を選択", "en": "Selected day"},
    "profile": {"ja": "プロフィール", "en": "Profile"},
    "notifications": {"ja": "通知", "en": "Notifications"},
    "appearance": {"ja": "表示", "en": "Appearance"},
    "privacy": {"ja": "プライバシー", "en": "Privacy"},
    "data": {"ja": "データ", "en": "Data"},
    "theme": {"ja": "テーマ", "en": "Theme"},
    "language": {"ja": "言語", "en": "Language"},
    "timezone": {"ja": "タイムゾーン", "en": "Timezone"},
    "notifications_enabled": {"ja": "通知を有効にする", "en": "Enable notifications"},
    "email_notifications": {"ja": "メール通知", "en": "Email notifications"},
    "default_minutes": {"ja": "既定の通知時間（分前）", "en": "Default reminder (minutes before)"},
    "export": {"ja": "データをエクスポート", "en": "Export data"},
    "import": {"ja": "データをインポート", "en": "Import data"},
    "import_parsed": {
        "ja": "ファイルを読み込みました（反映はされません）",
        "en": "File read. Nothing was imported into your account.",
    },
    "delete_account": {"ja": "アカウントを削除", "en": "Delete account"},
    "delete_account_warning": {
        "ja": "すべての日記・予定・設定が削除されます。元に戻せません",
        "en": "All entries, events and settings will be deleted. This cannot be undone.",
    },
}


def t(key, language="ja"):
    labels = TEXT.get(key)
    if labels is None:
        return key
    return labels.get(language) or labels["en"]
