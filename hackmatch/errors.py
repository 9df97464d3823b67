"""Exceptions raised by the match repository and service."""


class MatchNotFoundError(LookupError):
    """No team match is stored under the requested id."""

    def __init__(self, match_id: str):
        super().__init__(f"Match '{match_id}' not found")
        self.match_id = match_id


class InvalidMatchStateError(ValueError):
    """A status change is not allowed for the match."""


class ParticipantNotInMatchError(InvalidMatchStateError):
    """The requester is not one of the match's participants."""

    def __init__(self, match_id: str, email: str):
        super().__init__(f"Participant '{email}' is not part of match '{match_id}'")
        self.match_id = match_id
        self.email = email
