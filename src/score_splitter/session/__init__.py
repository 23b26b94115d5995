"""Edit session holding the user-corrected split list."""

from score_splitter.session.edit_session import (
    Assembler,
    EditRejected,
    EditSession,
    SplitOutput,
)

__all__ = ["Assembler", "EditRejected", "EditSession", "SplitOutput"]
