"""
Chat events.

Transport-neutral view of one incoming message or button press. The
aiogram router builds these; the session state machine consumes them.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatEvent:
    """One incoming update with canonical string identifiers."""

    user_id: str
    chat_id: str
    display_name: str = ""
    text: str | None = None
    photo_ref: str | None = None
    caption: str | None = None
    callback_data: str | None = None
    interaction_id: str | None = None

    @property
    def is_callback(self) -> bool:
        return self.callback_data is not None

    @property
    def command(self) -> str | None:
        """
        Leading slash command without the bot mention.

        ``"/start@VoucherBot payload"`` -> ``"/start"``
        """
        if not self.text or not self.text.startswith("/"):
            return None
        return self.text.split(maxsplit=1)[0].split("@", 1)[0].lower()

    @property
    def stripped_text(self) -> str:
        return (self.text or "").strip()
