"""
Text formatting utilities for the dashboard
"""

from typing import List
from src.models.view_state import DashboardStats, TaskCard


def format_stats(stats: DashboardStats) -> str:
    """
    Format summary counts

    Args:
        stats: Dashboard stats

    Returns:
        Formatted message
    """
    return (
        f"Total Tasks: {stats.total} | "
        f"Completed: {stats.completed} | "
        f"In Progress: {stats.in_progress} | "
        f"Pending: {stats.pending}"
    )


def format_task_card(card: TaskCard) -> str:
    """
    Format one task for plain-text output

    Args:
        card: Task presentation data

    Returns:
        Formatted message
    """
    task = card.task
    lines = [f"{task.title or ''} [{task.status or '—'}]"]

    if task.description:
        lines.append(f"  {task.description}")

    due = f"📅 {card.due_date_label} at {card.due_time_label}"
    if task.category:
        lines.append(f"  🏷️ {task.category} {due}")
    else:
        lines.append(f"  {due}")

    if card.due_soon:
        lines.append("  ⚠️ Due soon!")

    return "\n".join(lines)


def format_dashboard(stats: DashboardStats, cards: List[TaskCard], error: str = "") -> str:
    """
    Format the whole dashboard

    Args:
        stats: Dashboard stats
        cards: Task cards in list order
        error: Current error message, if any

    Returns:
        Formatted message
    """
    parts = [format_stats(stats)]

    if error:
        parts.append(f"❌ {error}")

    if cards:
        parts.extend(format_task_card(card) for card in cards)
    else:
        parts.append("No tasks yet")

    return "\n\n".join(parts)
