# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import os

import github3


def host_org_and_repo(
    repo_url: str=None,
) -> tuple[str, str, str]:
    '''
    returns a three-tuple of `host`, `org`, `repo`. If repo_url is passed, it is assumed point to
    a github-hosted repository (it may or may not have a schema). Otherwise, fallback to
    environment variables GITHUB_SERVER_URL, GITHUB_REPOSITORY, as set for GitHub-Actions-runs
    is done.

    raises ValueError if repo_url is malformed, KeyError if (absent repo_url) environment
    variables are not set.
    '''
    if repo_url:
        if '://' in repo_url:
            repo_url = repo_url.split('://')[-1]
        parts = repo_url.strip('/').removesuffix('.git').split('/')
        if len(parts) != 3:
            raise ValueError(f'expected {{host}}/{{org}}/{{repo}}, got: {repo_url=}')
        host, org, repo = parts
    else:
        host = os.environ['GITHUB_SERVER_URL'].removeprefix('https://')
        org, repo = os.environ['GITHUB_REPOSITORY'].split('/')

    return host, org, repo


def github_api(
    repo_url: str=None,
    token: str=None,
    user_agent: str=None,
) -> github3.GitHub:
    '''
    returns an initialised github-api instance, honouring some environment variables typically
    present for GitHub-Actions-runs.
    '''
    host, _, _ = host_org_and_repo(
        repo_url=repo_url,
    )

    token = token or os.environ.get('GITHUB_TOKEN')

    if host == 'github.com':
        github_api = github3.GitHub(token=token)
    else:
        server_url = os.environ.get('GITHUB_SERVER_URL', f'https://{host}')
        github_api = github3.GitHubEnterprise(
            url=server_url,
            token=token,
        )

    if user_agent:
        github_api.set_user_agent(user_agent)

    return github_api


def repository(
    repo_url: str=None,
    token: str=None,
    user_agent: str=None,
):
    _, org, repo = host_org_and_repo(repo_url=repo_url)

    api = github_api(
        repo_url=repo_url,
        token=token,
        user_agent=user_agent,
    )

    return api.repository(org, repo)
