from typing import Dict, List, Optional

from bingo.models import Participant, Ticket, UserInfo


class SessionRegistry:
    """Connected participants, their room and their most recent ticket."""

    def __init__(self):
        self._participants: Dict[str, Participant] = {}
        self._tickets: Dict[str, Ticket] = {}

    def join(self, connection_id: str, room: str, name: str) -> Participant:
        participant = Participant(connection_id=connection_id, name=name, room=room)
        self._participants[connection_id] = participant
        return participant

    def leave(self, connection_id: str) -> Optional[Participant]:
        self._tickets.pop(connection_id, None)
        return self._participants.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[Participant]:
        return self._participants.get(connection_id)

    def list_participants(self) -> List[UserInfo]:
        return [UserInfo(p.connection_id, p.name) for p in self._participants.values()]

    def set_ticket(self, connection_id: str, ticket: Ticket) -> bool:
        # Tickets only live as long as their participant
        if connection_id not in self._participants:
            return False
        self._tickets[connection_id] = ticket
        return True

    def get_ticket(self, connection_id: str) -> Optional[Ticket]:
        return self._tickets.get(connection_id)

    def display_name(self, connection_id: str) -> str:
        participant = self._participants.get(connection_id)
        return participant.name if participant else connection_id

    def __len__(self):
        return len(self._participants)
