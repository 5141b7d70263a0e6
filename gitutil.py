# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import logging

import git

import release_notes.model as rnm

logger = logging.getLogger(__name__)


class GitHelper:
    '''
    read-only access to a local git-repository's history, as needed for drafting releases.
    '''
    def __init__(
        self,
        repo: git.Repo | str,
    ):
        if repo is None:
            raise ValueError(repo)
        if isinstance(repo, str):
            repo = git.Repo(repo)
        if not isinstance(repo, git.Repo):
            raise ValueError(repo)

        self.repo = repo

    @property
    def repo_path(self) -> str:
        return self.repo.working_tree_dir

    def list_commits(
        self,
        from_ref: str,
        to_ref: str='HEAD',
    ) -> tuple[rnm.Commit, ...]:
        '''
        returns the commits in range `from_ref` to `to_ref` (both inclusive), in order of
        ascending commit time (i.e. oldest commit first).

        raises git.exc.BadName if either ref cannot be resolved.
        '''
        from_commit = self.repo.commit(from_ref)
        to_commit = self.repo.commit(to_ref)

        commits = [from_commit]
        commits.extend(self.repo.iter_commits(
            f'{from_commit.hexsha}..{to_commit.hexsha}',
            reverse=True,
        ))

        logger.debug(f'{len(commits)} commits in range {from_ref}..{to_ref}')

        return tuple(
            rnm.Commit(
                hash=commit.hexsha,
                message=commit.message.strip(),
            ) for commit in commits
        )

    def file_contents(
        self,
        commitish: str,
        path: str,
    ) -> str:
        '''
        returns the contents of the file at `path` (relative to repository root) as of
        `commitish`.

        raises git.exc.GitCommandError if the file is absent at the given revision.
        '''
        return self.repo.git.show(f'{commitish}:{path}')
