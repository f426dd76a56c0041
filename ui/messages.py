import random

from core.models import ReminderType

MOTIVATIONAL_QUOTES = [
    "Your health is an investment, not an expense.",
    "Small daily improvements lead to stunning results.",
    "Take care of your body. It's the only place you have to live.",
    "The greatest wealth is health.",
    "Every step you take is progress.",
    "Consistency is the key to success.",
]

REMINDER_ICONS = {
    ReminderType.WATER: "💧",
    ReminderType.EXERCISE: "🏋️",
    ReminderType.MEDICATION: "💊",
    ReminderType.SLEEP: "😴",
    ReminderType.MEDITATION: "🧘",
}

LOGIN_FAILED = "Invalid email or password. Please try again."
SIGNUP_EMAIL_TAKEN = "Email already exists. Please try logging in instead."
SIGNUP_NAME_REQUIRED = "Please enter your name to sign up."

COMPLETION_PRAISE = "Great job! Keep up the consistency!"

def random_quote(rng=random):
    return rng.choice(MOTIVATIONAL_QUOTES)

def reminders_due_message(count: int) -> str:
    return f"You have {count} reminders for today."

def welcome_message(user):
    return f"Welcome back, {user.name}! 👋"

def reminder_line(reminder):
    status = "✅" if reminder.completed else "⬜️"
    icon = REMINDER_ICONS.get(reminder.type, "🔔")
    line = f"{status} {reminder.time} {icon} {reminder.title} [{reminder.repeat.value}]  ({reminder.id})"
    if reminder.notes:
        line += f"\n      {reminder.notes}"
    return line

def reminders_list_message(reminders):
    if not reminders:
        return "You have no reminders yet. Add your first one!"
    return "Your reminders:\n" + "\n".join(reminder_line(r) for r in reminders)

def progress_message(progress: int, total: int):
    percent = round(progress / total * 100) if total else 0
    return f"Progress: {progress} of {total} reminders completed ({percent}%)"

def streak_message(streak):
    return f"🔥 Current streak: {streak} days"

def stats_message(data):
    lines = [
        "📊 Statistics:",
        f"Completion rate: {data.get('completion_rate', 0)}%",
        f"Today's progress: {data.get('today_progress', 0)}%",
        f"Completed: {data.get('completed', 0)}",
        streak_message(data.get("streak", 0)),
    ]

    distribution = data.get("distribution", {})
    if distribution:
        lines.append("By type:")
        for type_name, count in distribution.items():
            icon = REMINDER_ICONS.get(ReminderType(type_name), "🔔")
            lines.append(f"  {icon} {type_name}: {count}")

    weekly = data.get("weekly", [])
    if weekly:
        lines.append("This week: " + " ".join(str(n) for n in weekly))

    return "\n".join(lines)

def settings_message(settings):
    lines = ["⚙️ Settings:"]
    for name, value in settings.to_dict().items():
        lines.append(f"  {name}: {'on' if value else 'off'}")
    return "\n".join(lines)
