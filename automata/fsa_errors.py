from typing import Optional

# Reason code reported by step traces when the active state(s) have no
# outgoing transition for the current symbol. Not an exception.
REJECT_NO_TRANSITION = 'no_transition'
REJECT_NO_START_STATE = 'no_start_state'


class AutomatonError(ValueError):
    """Base class for rejected construction steps.

    Raising one of these never leaves the automaton partially modified.
    """

    code = 'automaton_error'


class DuplicateState(AutomatonError):
    code = 'duplicate_state'

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"State '{state}' already exists")


class EmptyStateName(AutomatonError):
    code = 'empty_state_name'

    def __init__(self):
        super().__init__('State name cannot be empty')


class UnknownState(AutomatonError):
    code = 'unknown_state'

    def __init__(self, state: str, role: Optional[str] = None):
        self.state = state
        self.role = role
        if role:
            message = f"{role.capitalize()} state '{state}' does not exist"
        else:
            message = f"State '{state}' does not exist"
        super().__init__(message)


class UnknownTransition(AutomatonError):
    code = 'unknown_transition'

    def __init__(self, from_state: str, symbol: str, to_state: str):
        self.from_state = from_state
        self.symbol = symbol
        self.to_state = to_state
        super().__init__(f"No transition '{from_state}' --{symbol}--> '{to_state}'")


class EmptySymbol(AutomatonError):
    code = 'empty_symbol'

    def __init__(self):
        super().__init__('DFA transitions need a non-empty symbol other than the epsilon marker')


class MissingTargetState(AutomatonError):
    code = 'missing_target_state'

    def __init__(self, from_state: str):
        self.from_state = from_state
        super().__init__(f"Transition from '{from_state}' has no destination state")


class InvalidKind(AutomatonError):
    code = 'invalid_kind'

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unknown automaton type '{kind}', expected 'dfa' or 'nfa'")


class InvalidTransition(AutomatonError):
    code = 'invalid_transition'

    def __init__(self, message: str):
        super().__init__(message)


class InvalidStateName(AutomatonError):
    code = 'invalid_state_name'

    def __init__(self, name):
        self.name = name
        super().__init__(f'State name must be a string, got {type(name).__name__}')
