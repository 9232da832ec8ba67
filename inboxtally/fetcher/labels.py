"""Gmail label name lookup."""

from googleapiclient.discovery import Resource

# Labels never shown as folders even when Gmail reports them as user labels
HIDDEN_LABELS = {
    "CHAT",
    "UNREAD",
    "IMPORTANT",
    "DRAFT",
    "SENT",
    "SPAM",
    "TRASH",
    "STARRED",
    "Blocked",
}


def _is_folder_label(label: dict) -> bool:
    label_id = label.get("id", "")
    name = label.get("name") or ""
    if label.get("type") == "system":
        return False
    if label_id in HIDDEN_LABELS or name in HIDDEN_LABELS:
        return False
    return not (label_id.startswith("CATEGORY_") or name.startswith("CATEGORY_"))


def fetch_label_names(service: Resource) -> dict[str, str]:
    """
    Fetch a mapping of user label ids to their names.

    Args:
        service: Gmail API service.

    Returns:
        Dictionary mapping label id to name, user labels only.

    Raises:
        googleapiclient.errors.HttpError: If the label list request fails.
    """
    results = (
        service.users()
        .labels()
        .list(userId="me", fields="labels(id,name,type)")
        .execute()
    )

    return {
        label["id"]: label["name"]
        for label in results.get("labels", [])
        if label.get("name") and _is_folder_label(label)
    }
