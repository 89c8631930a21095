"""Interactive command shell around a crossword session."""

from __future__ import annotations

import cmd
import shlex
from typing import Callable, List, Optional

from ..core.constants import SolveState
from ..core.exceptions import AmbiguousSlotError, CrosswordError, SlotNotFoundError
from ..engine.session import CrosswordSession, SlotFilter
from ..utils.logger import get_logger
from ..utils.pretty import (
    format_board,
    format_columns,
    format_crossing,
    format_slot,
    format_slot_info,
    format_solution,
)


LOGGER = get_logger(__name__)


class CrosswordShell(cmd.Cmd):
    """Line oriented shell; ``help`` lists the commands."""

    prompt = "> "
    intro = "Type 'help' for a list of commands."

    def __init__(
        self,
        session: CrosswordSession,
        ask: Callable[[str], str] = input,
        stdin=None,
        stdout=None,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.session = session
        self._ask = ask

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------
    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _args(self, arg: str, count: int, usage: str) -> Optional[List[str]]:
        try:
            parts = shlex.split(arg)
        except ValueError as exc:
            self._print(f"Invalid arguments: {exc}")
            return None
        if len(parts) != count:
            self._print(f"Usage: {usage}")
            return None
        return parts

    def _resolve(self, token: str) -> Optional[int]:
        try:
            return self.session.find_slot(token)
        except SlotNotFoundError as exc:
            self._print(str(exc))
        except AmbiguousSlotError as exc:
            for index in exc.matches:
                self._print(format_slot(self.session.board, index))
            answer = self._ask("Select slot: ").strip()
            if answer.isdecimal() and int(answer) in exc.matches:
                return int(answer)
            self._print(f"Invalid selection: {answer}")
        return None

    def _show(self, which: SlotFilter) -> None:
        board = self.session.board
        lines = [format_slot(board, index) for index in self.session.slot_indices(which)]
        self._print(format_columns(lines))

    def _confirm(self, question: str) -> bool:
        answer = self._ask(f"{question} (Y/n) ").strip().lower()
        return answer in ("", "y", "yes")

    def preloop(self) -> None:
        self.do_solve("")
        self.do_board("")

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> bool:
        self._print(f"Bad command: {line}")
        return False

    def onecmd(self, line: str) -> bool:
        try:
            return super().onecmd(line)
        except CrosswordError as exc:
            self._print(str(exc))
            return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def do_solve(self, arg: str) -> None:
        """solve: place every slot that has a single candidate left."""
        state = self.session.solve()
        self._print(state.value.capitalize())
        if state == SolveState.SOLVED:
            self._print()
            self.do_board("")

    def do_words(self, arg: str) -> None:
        """words: list all slots."""
        self._show(SlotFilter.ALL)

    def do_placed(self, arg: str) -> None:
        """placed: list placed slots."""
        self._show(SlotFilter.PLACED)

    def do_unplaced(self, arg: str) -> None:
        """unplaced: list slots not placed yet."""
        self._show(SlotFilter.UNPLACED)

    def do_missing(self, arg: str) -> None:
        """missing: list open slots without candidates."""
        self._show(SlotFilter.MISSING)

    def do_ambiguous(self, arg: str) -> None:
        """ambiguous: list open slots with several candidates."""
        self._show(SlotFilter.AMBIGUOUS)

    def do_crossing(self, arg: str) -> None:
        """crossing <key>: show a slot with the slots crossing it."""
        parts = self._args(arg, 1, "crossing <key>")
        index = self._resolve(parts[0]) if parts else None
        if index is None:
            return
        if not self.session.board.neighbors(index):
            self._print("No crossing words for key")
            return
        self._print(format_slot(self.session.board, index))
        self._print(format_crossing(self.session.board, index))

    def do_candidates(self, arg: str) -> None:
        """candidates <key>: list the remaining candidates of a slot."""
        parts = self._args(arg, 1, "candidates <key>")
        index = self._resolve(parts[0]) if parts else None
        if index is None:
            return
        for word in self.session.board.slots[index].candidates:
            self._print(f"  {word}")

    def do_info(self, arg: str) -> None:
        """info <key>: show geometry, candidates and crossings of a slot."""
        parts = self._args(arg, 1, "info <key>")
        index = self._resolve(parts[0]) if parts else None
        if index is None:
            return
        board = self.session.board
        self._print(format_slot(board, index))
        self._print(format_slot_info(board, index))
        self._print()
        self._print(format_crossing(board, index))

    def do_solution(self, arg: str) -> None:
        """solution: show the letters known of the solution phrase."""
        self._print(format_solution(self.session.board))

    def do_board(self, arg: str) -> None:
        """board: draw the grid."""
        self._print(format_board(self.session.board))
        self._print()

    def do_place(self, arg: str) -> None:
        """place <key> <word>: put a word into a slot."""
        parts = self._args(arg, 2, "place <key> <word>")
        index = self._resolve(parts[0]) if parts else None
        if index is None:
            return
        self.session.place(index, parts[1])

    def do_unplace(self, arg: str) -> None:
        """unplace <key>: remove a placed word and recompute candidates."""
        parts = self._args(arg, 1, "unplace <key>")
        index = self._resolve(parts[0]) if parts else None
        if index is None:
            return
        self.session.unplace(index)

    def do_lookup(self, arg: str) -> None:
        """lookup <key> <length>|<hint>: query the dictionary directly."""
        parts = self._args(arg, 2, "lookup <key> <length>|<hint>")
        if parts:
            self._print(" ".join(self.session.lookup(parts[0], parts[1])))

    def do_store(self, arg: str) -> None:
        """store board|dictionary [<filename>]: save to disk."""
        try:
            parts = shlex.split(arg)
        except ValueError as exc:
            self._print(f"Invalid arguments: {exc}")
            return
        if not parts or parts[0] not in ("board", "dictionary") or len(parts) > 2:
            self._print("Usage: store board|dictionary [<filename>]")
            return
        target = parts[1] if len(parts) == 2 else None
        if parts[0] == "board":
            path = self.session.store_board(target)
        else:
            path = self.session.store_dictionary(target)
        self._print(f"Saved {path}")

    def do_add(self, arg: str) -> None:
        """add <key> <word> [<word> ...]: add words to the dictionary."""
        try:
            parts = shlex.split(arg)
        except ValueError as exc:
            self._print(f"Invalid arguments: {exc}")
            return
        if len(parts) < 2:
            self._print("Usage: add <key> <word> [<word> ...]")
            return
        words = parts[1:]
        added = self.session.add_words(parts[0], words)
        if not added:
            self._print("Word not added")
        elif added < len(words):
            self._print(f"Added {added} of {len(words)} words")

    def do_quit(self, arg: str) -> bool:
        """quit: leave the shell, offering to save changes."""
        session = self.session
        if session.board.changed and self._confirm(f"Save changes to {session.board_path}?"):
            session.store_board()
        if session.dictionary.changed and self._confirm(
            f"Save dictionary to {session.dictionary.path}?"
        ):
            session.store_dictionary()
        return True

    do_exit = do_quit

    def do_EOF(self, arg: str) -> bool:
        self._print()
        return self.do_quit(arg)

    # ------------------------------------------------------------------
    # Tab completion
    # ------------------------------------------------------------------
    def _complete_keys(self, text: str) -> List[str]:
        return [key for key in self.session.completion_keys() if key.startswith(text)]

    def _complete_key_arg(self, text: str, line: str, begidx: int, endidx: int) -> List[str]:
        return self._complete_keys(text)

    complete_crossing = _complete_key_arg
    complete_candidates = _complete_key_arg
    complete_info = _complete_key_arg
    complete_unplace = _complete_key_arg

    def complete_place(self, text: str, line: str, begidx: int, endidx: int) -> List[str]:
        words = line[:begidx].split()
        if len(words) <= 1:
            return self._complete_keys(text)
        candidates = self.session.completion_candidates(words[1])
        return [word for word in candidates if word.startswith(text.upper())]

    def complete_lookup(self, text: str, line: str, begidx: int, endidx: int) -> List[str]:
        if len(line[:begidx].split()) <= 1:
            keys = self.session.completion_keys(include_dictionary=True)
            return [key for key in keys if key.startswith(text)]
        return []

    complete_add = complete_lookup

    def complete_store(self, text: str, line: str, begidx: int, endidx: int) -> List[str]:
        if len(line[:begidx].split()) <= 1:
            return [target for target in ("board", "dictionary") if target.startswith(text)]
        return []
