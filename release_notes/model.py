import collections
import collections.abc
import dataclasses
import enum
import logging
import re

import release_notes.markdown as rnmd


logger = logging.getLogger(__name__)


class ChangeType(enum.StrEnum):
    NEW = 'NEW'
    INC = 'INC'
    NONE = 'NONE'

    @staticmethod
    def heading(change_type: 'ChangeType') -> str:
        return {
            ChangeType.NEW: 'New Additions',
            ChangeType.INC: 'Backwards Incompatible Changes',
            ChangeType.NONE: 'Other Changes',
        }[change_type]


# sections are always rendered in this order
RELEASE_SECTIONS = (
    ChangeType.NEW,
    ChangeType.INC,
    ChangeType.NONE,
)

NO_RELEASE_NOTES = 'No release notes.'


@dataclasses.dataclass(frozen=True)
class Commit:
    hash: str
    message: str


@dataclasses.dataclass
class ChangeNote:
    change_type: ChangeType
    note_text: str
    hash: str
    rolledback: bool = False


r'''
release notes are annotated in commit messages using the following notation:

RELNOTES: some change
RELNOTES[NEW]: some new addition
RELNOTES[INC]: some backwards incompatible change

the note ends at the end of the line.
'''
_relnotes_pattern = re.compile(r'RELNOTES(?:\[(INC|NEW)\])?:(.*)')

r'''
matches messages of commits rolling back (or reverting) an earlier commit, e.g.

Rollback of "some change" ... abcdef0
Reverts abcdef0123.

the rollback phrase and the referenced commit's hash (or a prefix thereof, at least 7 characters)
are expected on the last line, the hash at its very end (one trailing character, e.g. a period,
is tolerated).
'''
_rollback_pattern = re.compile(
    r'(?:roll(?:s|ed)?\s*back|revert(?:s|ed)?).*\s([A-Fa-f0-9]{7,}).?$',
    flags=re.IGNORECASE,
)

# explicit opt-out, e.g. "RELNOTES: n/a" or "RELNOTES: None."
_invalid_note_pattern = re.compile(r'\b(?:none|n/?a)\.?$', flags=re.IGNORECASE)
# a note-text consisting of nothing but the opt-out token
_opt_out_note_text_pattern = re.compile(r'(?:none|n/?a)\.?', flags=re.IGNORECASE)


def commit_hashes_equal(a: str, b: str) -> bool:
    '''
    commit hashes are considered equal if either is a prefix of the other (to tolerate
    comparing abbreviated and full hashes)
    '''
    return a.startswith(b) or b.startswith(a)


def is_invalid_note(text: str) -> bool:
    return bool(_invalid_note_pattern.search(text.strip()))


def rolled_back_hash(message: str) -> str | None:
    if not (match := _rollback_pattern.search(message)):
        return None
    return match.group(1)


def parse_note(message: str) -> tuple[ChangeType, str] | None:
    '''
    returns change-type and (unescaped, stripped) note-text from the given commit message, or
    None if the message does not carry a release note.
    '''
    if not (match := _relnotes_pattern.search(message)):
        return None

    change_type = ChangeType(match.group(1) or ChangeType.NONE)
    return change_type, match.group(2).strip()


def classify_changes(
    changes: collections.abc.Iterable[Commit],
) -> list[ChangeNote]:
    '''
    extracts change notes from the given commits (expected in order of ascending commit time).

    Commits rolling back an earlier commit will not yield a change note; instead, a previously
    extracted note for the rolled-back commit is marked as `rolledback`.
    '''
    change_notes: list[ChangeNote] = []

    for change in changes:
        message = change.message

        if is_invalid_note(message):
            logger.debug(f'{change.hash}: release note explicitly omitted')
            continue

        if (rolledback_hash := rolled_back_hash(message)):
            for change_note in change_notes:
                if commit_hashes_equal(change_note.hash, rolledback_hash):
                    logger.debug(f'{change.hash}: rolls back {change_note.hash}')
                    change_note.rolledback = True
                    break
            else:
                logger.debug(f'{change.hash}: rolled back commit {rolledback_hash} not found')
            continue

        if not (parsed := parse_note(message)):
            continue

        change_type, note_text = parsed
        if _opt_out_note_text_pattern.fullmatch(note_text):
            continue

        change_notes.append(ChangeNote(
            change_type=change_type,
            note_text=rnmd.escape_markdown(note_text),
            hash=change.hash,
        ))

    return change_notes


def render_release_notes(
    change_notes: collections.abc.Iterable[ChangeNote],
) -> str:
    '''
    renders the given change notes as markdown, grouped into sections by change-type. Notes
    marked as `rolledback` are omitted. If no notes remain, `NO_RELEASE_NOTES` is returned.
    '''
    notes_by_type: dict[ChangeType, list[ChangeNote]] = collections.defaultdict(list)
    for change_note in change_notes:
        if change_note.rolledback:
            continue
        notes_by_type[change_note.change_type].append(change_note)

    if not notes_by_type:
        return NO_RELEASE_NOTES

    return ''.join(
        rnmd.section(
            heading=rnmd.Heading(ChangeType.heading(change_type)),
            items=[
                rnmd.ListItem(text=change_note.note_text, reference=change_note.hash)
                for change_note in notes_by_type[change_type]
            ],
        ) for change_type in RELEASE_SECTIONS
    )


def create_release_notes(
    changes: collections.abc.Iterable[Commit],
) -> str:
    return render_release_notes(classify_changes(changes))
