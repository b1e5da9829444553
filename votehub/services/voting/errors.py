from enum import Enum


class BallotError(Enum):
    MALFORMED_BALLOT = ("Must select exactly 3 different candidates", 400)
    UNKNOWN_VOTER = ("Invalid voter", 401)
    ALREADY_VOTED = ("You have already voted", 400)
    UNKNOWN_CANDIDATE = ("Invalid candidate selected", 400)
    SELF_VOTE = ("Cannot vote for yourself", 400)
    STORAGE_FAILURE = ("Could not record your ballot, please try again", 500)

    @property
    def message(self):
        return self.value[0]

    @property
    def status_code(self):
        return self.value[1]
