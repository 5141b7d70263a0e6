#! /usr/bin/env python3
import argparse
import logging
import os
import sys

import ci.log
import github
import gitutil
import release_notes.cfg as rnc
import release_notes.draft as rnd

logger = logging.getLogger(__name__)

default_cfg_file = '.draft-releases.yaml'


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Draft GitHub-releases for manifest version changes since the latest release',
    )
    parser.add_argument(
        '--cfg',
        default=None,
        help=f'path to configuration file (defaults to {default_cfg_file}, if present)',
    )
    parser.add_argument(
        '--repo-url',
        default=None,
        help='github-repo-url ({host}/{org}/{repo}). derived from GitHubActions-Env-Vars by default',
    )
    parser.add_argument(
        '--repo-worktree',
        default=os.getcwd(),
        help='path to repository\'s worktree root',
    )
    parser.add_argument(
        '--manifest',
        dest='manifest_path',
        default=None,
        help='path to manifest declaring the version (relative to repository root)',
    )
    parser.add_argument(
        '--release-name-template',
        default=None,
        help='format-string for release-names (e.g. "My Library {version}")',
    )
    parser.add_argument(
        '--user-agent',
        default=None,
    )
    parser.add_argument(
        '--head',
        default=None,
        help='the last commit to consider (defaults to HEAD)',
    )
    parser.add_argument(
        '--since',
        default=None,
        help='the commit to start from (defaults to latest published release\'s commit)',
    )
    parser.add_argument(
        '--github-auth-token',
        default=os.environ.get('GITHUB_TOKEN', None),
        help='the github-auth-token to use (defaults to env-var GITHUB_TOKEN)',
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        default=False,
        help='if set, release-notes are only logged (no releases are created)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=False,
    )

    return parser.parse_args(argv)


def effective_cfg(parsed: argparse.Namespace) -> rnc.DrafterCfg:
    if (cfg_path := parsed.cfg):
        cfg = rnc.load_cfg(cfg_path)
    elif os.path.isfile(cfg_path := os.path.join(parsed.repo_worktree, default_cfg_file)):
        cfg = rnc.load_cfg(cfg_path)
    else:
        cfg = rnc.DrafterCfg()

    cfg = rnc.merge_cfg(
        cfg,
        repo_url=parsed.repo_url,
        manifest_path=parsed.manifest_path,
        release_name_template=parsed.release_name_template,
        user_agent=parsed.user_agent,
        head=parsed.head,
    )

    try:
        github.host_org_and_repo(repo_url=cfg.repo_url)
    except KeyError as e:
        raise rnc.ConfigurationError(
            f'--repo-url must be passed if env-var {e} is not set',
        ) from e
    except ValueError as e:
        raise rnc.ConfigurationError(str(e)) from e

    return cfg


def check_credentials(parsed: argparse.Namespace):
    if not parsed.github_auth_token and not parsed.dry_run:
        raise rnc.ConfigurationError('Need GITHUB_TOKEN env var to create releases.')


def draft_releases_cli(argv=None):
    parsed = parse_args(argv)

    ci.log.configure_default_logging(
        stdout_level=logging.DEBUG if parsed.verbose else logging.INFO,
    )

    try:
        check_credentials(parsed)
        cfg = effective_cfg(parsed)
    except rnc.ConfigurationError as e:
        print(f'error: {e}', file=sys.stderr)
        sys.exit(1)

    try:
        git_helper = gitutil.GitHelper(repo=parsed.repo_worktree)
        repository = github.repository(
            repo_url=cfg.repo_url,
            token=parsed.github_auth_token,
            user_agent=cfg.user_agent,
        )

        for version, url in rnd.draft_releases(
            git_helper=git_helper,
            repository=repository,
            cfg=cfg,
            since=parsed.since,
            dry_run=parsed.dry_run,
        ):
            if url:
                print(f'Drafted release for {version} at {url}')
            else:
                print(f'Would draft release for {version}')
    except Exception:
        logger.exception('failed to draft releases')
        sys.exit(1)


def main():
    draft_releases_cli()


if __name__ == '__main__':
    main()
