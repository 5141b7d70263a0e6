import collections.abc
import dataclasses
import json
import logging
import os

import yaml

import gitutil
import release_notes.model as rnm
import version


logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class VersionGroup:
    '''
    all commits (in order of ascending commit time) up to and including the commit at which the
    manifest first declared `version`.
    '''
    version: str
    changes: tuple[rnm.Commit, ...]

    @property
    def target_commit(self) -> str:
        return self.changes[-1].hash


def parse_manifest(
    raw: str,
    path: str,
) -> dict:
    '''
    parses the given manifest contents, honouring the manifest's file-suffix (YAML for `.yaml`
    and `.yml`, JSON otherwise).
    '''
    _, suffix = os.path.splitext(path)

    if suffix in ('.yaml', '.yml'):
        manifest = yaml.safe_load(raw)
    else:
        manifest = json.loads(raw)

    if not isinstance(manifest, dict):
        raise ValueError(f'expected a mapping, got {type(manifest)=}')

    return manifest


def manifest_version(
    git_helper: gitutil.GitHelper,
    commit: rnm.Commit,
    manifest_path: str,
) -> str:
    '''
    returns the major-version key (e.g. `v3`) declared by the manifest as of the given commit.

    raises ManifestError if the manifest cannot be parsed, or does not declare a valid version.
    '''
    raw = git_helper.file_contents(
        commitish=commit.hash,
        path=manifest_path,
    )

    try:
        manifest = parse_manifest(raw=raw, path=manifest_path)
    except (ValueError, yaml.YAMLError) as e:
        raise ManifestError(f'Bad {manifest_path} @ {commit.hash}: {e}') from e

    version_str = manifest.get('version')

    try:
        return version.major_version_key(version_str)
    except ValueError as e:
        raise ManifestError(
            f"Bad {manifest_path} version string '{version_str}' @ {commit.hash}"
        ) from e


def iter_versioned_commits(
    git_helper: gitutil.GitHelper,
    commits: collections.abc.Iterable[rnm.Commit],
    manifest_path: str,
) -> collections.abc.Generator[tuple[rnm.Commit, str], None, None]:
    for commit in commits:
        yield commit, manifest_version(
            git_helper=git_helper,
            commit=commit,
            manifest_path=manifest_path,
        )


def group_by_version(
    versioned_commits: collections.abc.Iterable[tuple[rnm.Commit, str]],
) -> list[VersionGroup]:
    '''
    groups the given commits (expected in order of ascending commit time, each paired w/ the
    version declared as of this commit) by version.

    A group is closed by the first commit declaring a version that has not been seen before;
    it contains all commits since the previous group was closed. Commits following the last
    group boundary are not part of any group.
    '''
    groups: list[VersionGroup] = []
    seen_versions = set()
    pending_changes: list[rnm.Commit] = []

    for commit, commit_version in versioned_commits:
        pending_changes.append(commit)

        if commit_version in seen_versions:
            continue

        seen_versions.add(commit_version)
        groups.append(VersionGroup(
            version=commit_version,
            changes=tuple(pending_changes),
        ))
        pending_changes = []

    if pending_changes:
        logger.debug(
            f'{len(pending_changes)} commit(s) after last version change will not be released'
        )

    return groups
