from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    NORMAL = "normal"
    SEARCH = "search"
    CREATE = "create"
    RENAME = "rename"


class PromptKey(str, Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESCAPE = "escape"


class Command(str, Enum):
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    GO_TOP = "go_top"
    GO_BOTTOM = "go_bottom"
    ACTIVATE = "activate"
    GO_BACK = "go_back"
    BEGIN_SEARCH = "begin_search"
    NEXT_MATCH = "next_match"
    BEGIN_CREATE = "begin_create"
    BEGIN_RENAME = "begin_rename"
    DELETE = "delete"
    UNDO = "undo"
    REDO = "redo"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    QUIT = "quit"


class OperationErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    NOT_DIRECTORY = "not_directory"
    IO = "io"
