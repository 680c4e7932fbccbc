"""Vote management service - per-user, per-note vote toggle."""

import logging
from dataclasses import dataclass
from typing import Iterable
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Count

from apps.accounts.models import User
from apps.notes.models import Note, NoteVote

from .exceptions import NoteNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteState:
    vote_count: int
    voted_by_me: bool


@transaction.atomic
def toggle_vote(*, note_id: UUID, user: User) -> VoteState:
    """
    Flip the user's vote on a note.

    Removes the vote if it exists, adds it otherwise. Calling it twice
    restores the original state.

    Args:
        note_id: UUID of the note
        user: User voting

    Returns:
        VoteState after the toggle

    Raises:
        NoteNotFoundError: If note doesn't exist
    """
    try:
        note = Note.objects.select_for_update().get(id=note_id)
    except Note.DoesNotExist:
        raise NoteNotFoundError(f"Note with ID {note_id} not found")

    deleted, _ = NoteVote.objects.filter(note=note, user=user).delete()

    if deleted:
        voted_by_me = False
    else:
        try:
            with transaction.atomic():
                NoteVote.objects.create(note=note, user=user)
        except IntegrityError:
            # A concurrent request already inserted the same vote
            logger.debug("Duplicate vote by %s on note %s ignored", user.id, note_id)
        voted_by_me = True

    return VoteState(
        vote_count=NoteVote.objects.filter(note=note).count(),
        voted_by_me=voted_by_me,
    )


def get_vote_state(*, note: Note, user: User) -> VoteState:
    return VoteState(
        vote_count=NoteVote.objects.filter(note=note).count(),
        voted_by_me=NoteVote.objects.filter(note=note, user=user).exists(),
    )


def annotate_votes(notes: Iterable[Note], user: User) -> list[Note]:
    """
    Attach `vote_count` and `voted_by_me` to each note.

    Uses two queries regardless of the number of notes.
    """
    notes = list(notes)
    if not notes:
        return notes

    note_ids = [note.id for note in notes]
    counts = dict(
        NoteVote.objects
        .filter(note_id__in=note_ids)
        .values('note_id')
        .annotate(total=Count('id'))
        .values_list('note_id', 'total')
    )
    mine = set(
        NoteVote.objects
        .filter(note_id__in=note_ids, user=user)
        .values_list('note_id', flat=True)
    )

    for note in notes:
        note.vote_count = counts.get(note.id, 0)
        note.voted_by_me = note.id in mine

    return notes
