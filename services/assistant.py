"""
Scripted health assistant

Replies are picked from a fixed set of canned answers; there is no model
behind it.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

logger = logging.getLogger('healthmate')

GREETING = "Hello! I'm your AI health assistant. How can I help you stay healthy today?"

CANNED_RESPONSES = [
    "That's great! Remember to stay hydrated and take breaks throughout the day.",
    "I recommend setting a reminder for that. Consistency is key to building healthy habits!",
    "Based on your activity, you're doing well! Keep up the good work.",
    "Have you considered adding a morning meditation routine? It can help reduce stress.",
    "Great question! I suggest tracking your progress to see patterns over time.",
]

@dataclass
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

class AssistantService:

    def __init__(self, announcer=None, rng: Optional[random.Random] = None):
        self.announcer = announcer
        self.rng = rng or random.Random()
        self.history: List[ChatMessage] = [ChatMessage(role="assistant", content=GREETING)]

    def reply(self, text: str, speak: bool = False) -> Optional[str]:
        """Record the user's message and answer it; blank input is ignored"""
        text = (text or "").strip()
        if not text:
            return None

        self.history.append(ChatMessage(role="user", content=text))
        answer = self.rng.choice(CANNED_RESPONSES)
        self.history.append(ChatMessage(role="assistant", content=answer))
        logger.debug(f"💬 Assistant replied to {len(text)} chars")

        if speak and self.announcer is not None:
            self.announcer.speak(answer)

        return answer

    def reset(self) -> None:
        self.history = [ChatMessage(role="assistant", content=GREETING)]
