#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HealthMate v1.0 - Command line client
Personal wellness reminders: accounts, reminders, settings and live notifications

Version: 1.0.0
"""

import argparse
import asyncio
import getpass
import logging
import signal
import sys
from typing import List, Optional

from config import get_config
from core.database import DatabaseError
from core.models import ReminderType, RepeatMode, ValidationError
from services import HealthMateApp
from ui import messages
from utils.logger import setup_logger
from utils.validators import is_valid_email, is_valid_name

logger = logging.getLogger('healthmate')

# ===== COMMANDS =====

def cmd_signup(app: HealthMateApp, args) -> int:
    if not is_valid_name(args.name):
        print(messages.SIGNUP_NAME_REQUIRED)
        return 1
    if not is_valid_email(args.email):
        print(f"'{args.email}' is not a valid email address.")
        return 1

    password = args.password or getpass.getpass("Password: ")
    if not app.auth.signup(args.name.strip(), args.email, password):
        print(messages.SIGNUP_EMAIL_TAKEN)
        return 1

    print(messages.welcome_message(app.auth.current_user))
    return 0

def cmd_login(app: HealthMateApp, args) -> int:
    password = args.password or getpass.getpass("Password: ")
    if not app.auth.login(args.email, password):
        print(messages.LOGIN_FAILED)
        return 1

    print(messages.welcome_message(app.auth.current_user))
    return 0

def cmd_logout(app: HealthMateApp, args) -> int:
    app.auth.logout()
    print("Logged out.")
    return 0

def cmd_whoami(app: HealthMateApp, args) -> int:
    user = app.auth.current_user
    if user is None:
        print("Not logged in.")
        return 1
    print(f"{user.name} <{user.email}>")
    return 0

def cmd_add(app: HealthMateApp, args) -> int:
    reminder = app.reminders.add_reminder({
        "title": args.title,
        "time": args.time,
        "type": args.type,
        "repeat": args.repeat,
        "notes": args.notes,
    })
    print("Added:")
    print(messages.reminder_line(reminder))
    return 0

def cmd_edit(app: HealthMateApp, args) -> int:
    patch = {
        name: getattr(args, name)
        for name in ("title", "time", "type", "repeat", "notes")
        if getattr(args, name) is not None
    }
    if not patch:
        print("Nothing to change.")
        return 1

    reminder = app.reminders.update_reminder(args.id, patch)
    if reminder is None:
        print(f"No reminder with id {args.id}.")
        return 1

    print("Updated:")
    print(messages.reminder_line(reminder))
    return 0

def cmd_list(app: HealthMateApp, args) -> int:
    reminders = app.reminders.get_today_reminders() if args.today else app.reminders.reminders
    print(messages.reminders_list_message(reminders))
    print(messages.progress_message(app.reminders.get_completed_count(), len(app.reminders.reminders)))
    return 0

def cmd_toggle(app: HealthMateApp, args) -> int:
    completed = app.complete_reminder(args.id)
    if completed is None:
        print(f"No reminder with id {args.id}.")
        return 1

    print(messages.COMPLETION_PRAISE if completed else "Marked as not done.")
    return 0

def cmd_delete(app: HealthMateApp, args) -> int:
    if not app.reminders.delete_reminder(args.id):
        print(f"No reminder with id {args.id}.")
        return 1
    print("Deleted.")
    return 0

def cmd_stats(app: HealthMateApp, args) -> int:
    print(messages.stats_message(app.get_stats()))
    return 0

def cmd_settings(app: HealthMateApp, args) -> int:
    if args.name is None:
        print(messages.settings_message(app.settings.settings))
        return 0

    if args.value is None:
        app.settings.toggle(args.name)
    else:
        app.settings.update_settings({args.name: args.value == "on"})

    print(messages.settings_message(app.settings.settings))
    return 0

def cmd_chat(app: HealthMateApp, args) -> int:
    print(f"🤖 {app.assistant.history[0].content}")

    if args.message:
        print(f"🤖 {app.chat(' '.join(args.message))}")
        return 0

    while True:
        try:
            text = input("you> ")
        except EOFError:
            break
        if text.strip().lower() in ("quit", "exit"):
            break
        answer = app.chat(text)
        if answer:
            print(f"🤖 {answer}")
    return 0

async def _watch(app: HealthMateApp) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop.set)
        except NotImplementedError:
            # Windows event loops; Ctrl+C still raises KeyboardInterrupt
            pass

    app.notifications.start()
    try:
        armed = app.arm_all()
        logger.info(f"👀 Watching {armed} reminders, press Ctrl+C to stop")

        await stop.wait()
        logger.info("📢 Stop requested, shutting down...")
    finally:
        app.notifications.shutdown()

def cmd_watch(app: HealthMateApp, args) -> int:
    print(f"✨ {app.enter_dashboard()}")
    try:
        asyncio.run(_watch(app))
    except KeyboardInterrupt:
        logger.info("⌨️ Interrupted from keyboard")
    return 0

# ===== ARGUMENTS =====

LOGIN_REQUIRED = {"add", "edit", "list", "toggle", "delete", "stats", "settings", "chat", "watch"}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="healthmate", description="Personal wellness reminders")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("signup", help="Create an account and log in")
    p.add_argument("--name", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password")
    p.set_defaults(handler=cmd_signup)

    p = sub.add_parser("login", help="Log in")
    p.add_argument("--email", required=True)
    p.add_argument("--password")
    p.set_defaults(handler=cmd_login)

    sub.add_parser("logout", help="End the current session").set_defaults(handler=cmd_logout)
    sub.add_parser("whoami", help="Show the logged-in user").set_defaults(handler=cmd_whoami)

    types = [t.value for t in ReminderType]
    repeats = [r.value for r in RepeatMode]

    p = sub.add_parser("add", help="Add a reminder")
    p.add_argument("--title", required=True)
    p.add_argument("--time", required=True, help="HH:MM, 24-hour")
    p.add_argument("--type", required=True, choices=types)
    p.add_argument("--repeat", default="daily", choices=repeats)
    p.add_argument("--notes")
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("edit", help="Change a reminder")
    p.add_argument("id")
    p.add_argument("--title")
    p.add_argument("--time")
    p.add_argument("--type", choices=types)
    p.add_argument("--repeat", choices=repeats)
    p.add_argument("--notes")
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("list", help="List reminders")
    p.add_argument("--today", action="store_true", help="Only daily reminders")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("toggle", help="Mark a reminder done or not done")
    p.add_argument("id")
    p.set_defaults(handler=cmd_toggle)

    p = sub.add_parser("delete", help="Delete a reminder")
    p.add_argument("id")
    p.set_defaults(handler=cmd_delete)

    sub.add_parser("stats", help="Show progress statistics").set_defaults(handler=cmd_stats)

    p = sub.add_parser("settings", help="Show, toggle or set a setting")
    p.add_argument("name", nargs="?", help="e.g. darkMode or tts_enabled")
    p.add_argument("value", nargs="?", choices=["on", "off"])
    p.set_defaults(handler=cmd_settings)

    p = sub.add_parser("chat", help="Talk to the health assistant")
    p.add_argument("message", nargs="*")
    p.set_defaults(handler=cmd_chat)

    sub.add_parser("watch", help="Deliver today's reminders as notifications").set_defaults(handler=cmd_watch)

    return parser

# ===== ENTRY POINT =====

def main(argv: Optional[List[str]] = None, app: Optional[HealthMateApp] = None) -> int:
    args = build_parser().parse_args(argv)

    if app is None:
        try:
            app_config = get_config()
        except ValueError as e:
            print(e, file=sys.stderr)
            return 2
        app_config.ensure_directories()
        setup_logger(app_config)
        app = HealthMateApp(app_config)

    with app:
        if args.command in LOGIN_REQUIRED and not app.auth.is_authenticated:
            print("Please log in first (healthmate login --email ...).")
            return 1

        try:
            return args.handler(app, args)
        except ValidationError as e:
            print(f"Invalid input: {e}")
            return 1
        except DatabaseError as e:
            logger.error(f"❌ Storage error: {e}")
            return 1

if __name__ == "__main__":
    sys.exit(main())
