import collections.abc
import logging

import github3.repos

import github.release
import gitutil
import release_notes.cfg as rnc
import release_notes.model as rnm
import release_notes.versions as rnv

logger = logging.getLogger(__name__)


def detect_version_groups(
    git_helper: gitutil.GitHelper,
    since: str,
    cfg: rnc.DrafterCfg,
) -> list[rnv.VersionGroup]:
    '''
    returns version groups for all commits from `since` up to the configured head, excluding
    the first group (which corresponds to the already released version).

    The manifest is read and validated for each commit before returning, so any ManifestError
    is raised before callers start creating releases.
    '''
    commits = git_helper.list_commits(
        from_ref=since,
        to_ref=cfg.head,
    )
    logger.info(f'found {len(commits)} commits in range {since}..{cfg.head}')

    groups = rnv.group_by_version(
        rnv.iter_versioned_commits(
            git_helper=git_helper,
            commits=commits,
            manifest_path=cfg.manifest_path,
        )
    )

    if groups:
        logger.info(f'baseline version: {groups[0].version}')

    new_groups = groups[1:]
    if not new_groups:
        logger.info(f'no changes of {cfg.manifest_path} version since {since}')
    for group in new_groups:
        logger.info(
            f'new version {group.version} @ {group.target_commit} '
            f'({len(group.changes)} commits)'
        )

    return new_groups


def draft_releases(
    git_helper: gitutil.GitHelper,
    repository: github3.repos.Repository,
    cfg: rnc.DrafterCfg,
    since: str | None=None,
    dry_run: bool=False,
) -> collections.abc.Generator[tuple[str, str | None], None, None]:
    '''
    drafts a GitHub-release for each manifest version change since `since` (defaults to the
    latest published release's commit). Yields a tuple of version and release-url for each
    drafted release (url is None if `dry_run` is set).
    '''
    if not since:
        since = github.release.latest_release_commitish(repository)
    logger.info(f'considering commits since {since}')

    version_groups = detect_version_groups(
        git_helper=git_helper,
        since=since,
        cfg=cfg,
    )

    for group in version_groups:
        name = cfg.release_name(group.version)
        body = rnm.create_release_notes(group.changes)

        if dry_run:
            logger.info(f'would draft {name=} @ {group.target_commit}:\n{body}')
            yield group.version, None
            continue

        url = github.release.create_draft_release(
            repository=repository,
            tag_name=group.version,
            commitish=group.target_commit,
            name=name,
            body=body,
        )
        logger.info(f'drafted {name=} @ {group.target_commit}')

        yield group.version, url
