'''
utils wrapping github3.py's relase-API
'''

import logging

import github3.repos
import github3.repos.release

import github.limits

logger = logging.getLogger(__name__)


def body_or_replacement(
    body: str,
    replacement: str='body was too large (limit: {limit} / actual: {actual})',
    limit: int=github.limits.release_body,
) -> tuple[str, bool]:
    '''
    convenience function that will check whether given body is short enough to be accepted
    by GitHub's API. If so, passed body will be returned as first element of returned tuple, else
    replacement value.

    The second value of returned tuple will indicate whether original body was returned. Callers
    may use this hint to perform a mitigation.
    '''
    if github.limits.fits(
        body,
        limit=limit,
    ):
        return body, True

    return replacement.format(
        limit=limit,
        actual=len(body),
    ), False


def latest_release_commitish(
    repository: github3.repos.Repository,
) -> str:
    '''
    returns the target-commitish of the latest published (i.e. non-draft, non-prerelease)
    release.

    raises github3.exceptions.NotFoundError if there is no such release.
    '''
    release: github3.repos.release.Release = repository.latest_release()
    logger.info(f'latest release: {release.tag_name=} @ {release.target_commitish=}')

    return release.target_commitish


def create_draft_release(
    repository: github3.repos.Repository,
    tag_name: str,
    commitish: str,
    name: str,
    body: str,
) -> str:
    '''
    creates a draft-release targeting the given commitish and returns its (html-)url.

    Note that GitHub will only create the release's tag once the draft-release is published.
    '''
    body, fits = body_or_replacement(body)
    if not fits:
        logger.warning(f'release-notes for {tag_name=} exceed size-limit and were replaced')

    release = repository.create_release(
        tag_name=tag_name,
        target_commitish=commitish,
        name=name,
        body=body,
        draft=True,
    )

    return release.html_url
