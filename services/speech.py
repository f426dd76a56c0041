"""
Speech announcer: gTTS synthesis played through pygame's mixer
"""

import io
import logging

import pygame
from gtts import gTTS
from gtts.tts import gTTSError

logger = logging.getLogger('healthmate')

class SpeechAnnouncer:
    """
    Fire-and-forget text-to-speech.

    A new ``speak`` always cancels whatever is playing; there is no queue.
    Missing audio or network is logged and otherwise ignored.
    """

    PITCH = 1.0  # gTTS voices have a fixed pitch
    VOLUME = 1.0

    def __init__(self, language: str = "en", tld: str = "us"):
        self.language = language
        self.tld = tld
        self._mixer_ready = False

    def _ensure_mixer(self) -> bool:
        if self._mixer_ready:
            return True
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"⚠️ Text-to-speech not supported here (no audio device): {e}")
            return False
        self._mixer_ready = True
        return True

    def is_supported(self) -> bool:
        return self._ensure_mixer()

    def stop_speaking(self) -> None:
        if self._mixer_ready and pygame.mixer.get_init():
            pygame.mixer.music.stop()

    def speak(self, text: str, rate: float = 1.0) -> bool:
        if not self._ensure_mixer():
            return False

        self.stop_speaking()

        try:
            fp = io.BytesIO()
            gTTS(text=text, lang=self.language, tld=self.tld, slow=rate < 1).write_to_fp(fp)
            fp.seek(0)
        except gTTSError as e:
            logger.warning(f"⚠️ Speech synthesis failed: {e}")
            return False

        try:
            pygame.mixer.music.load(fp)
            pygame.mixer.music.set_volume(self.VOLUME)
            pygame.mixer.music.play()
        except pygame.error as e:
            logger.warning(f"⚠️ Speech playback failed: {e}")
            return False

        logger.debug(f"🔊 Speaking: {text}")
        return True
