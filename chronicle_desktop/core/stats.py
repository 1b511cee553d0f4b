from datetime import timedelta

import pandas as pd

STATUSES = ("new", "read", "replied", "archived")


def submission_stats(df, now=None):
    """
    Summarise contact form submissions.

    Args:
        df: DataFrame with ``status``, ``is_spam`` and ``created_at`` columns.
        now: Reference time (timezone-aware). Defaults to the current UTC time.

    Returns:
        dict with total, per-status counts, spam count and today / this_week / this_month counts.
        "today" and "this_month" start at midnight / the first of the month of ``now``;
        "this_week" is the trailing seven days.
    """
    now = pd.Timestamp.now(tz="UTC") if now is None else pd.Timestamp(now)
    if now.tzinfo is None:
        now = now.tz_localize("UTC")

    stats = {"total": int(len(df))}
    stats.update({status: 0 for status in STATUSES})
    stats.update({"spam": 0, "today": 0, "this_week": 0, "this_month": 0})
    if df.empty:
        return stats

    if "status" in df.columns:
        counts = df["status"].value_counts()
        for status in STATUSES:
            stats[status] = int(counts.get(status, 0))

    if "is_spam" in df.columns:
        stats["spam"] = int(df["is_spam"].fillna(False).astype(bool).sum())

    if "created_at" in df.columns:
        created = pd.to_datetime(df["created_at"], errors="coerce", utc=True)
        today = now.normalize()
        this_week = now - timedelta(days=7)
        this_month = today.replace(day=1)
        stats["today"] = int((created >= today).sum())
        stats["this_week"] = int((created >= this_week).sum())
        stats["this_month"] = int((created >= this_month).sum())

    return stats
