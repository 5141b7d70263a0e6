import json

import pytest

import release_notes.versions as rnv
from release_notes.model import Commit


class ManifestsByCommit:
    '''
    stands in for gitutil.GitHelper, serving manifest contents by commit-hash
    '''
    def __init__(self, manifests: dict[str, str]):
        self.manifests = manifests
        self.requested = []

    def file_contents(self, commitish: str, path: str) -> str:
        self.requested.append((commitish, path))
        return self.manifests[commitish]


def _commits(count: int) -> list[Commit]:
    return [Commit(hash=f'c{i}', message=f'commit {i}') for i in range(1, count + 1)]


def test_group_by_version():
    c1, c2, c3, c4 = _commits(4)

    groups = rnv.group_by_version([
        (c1, 'v1'),
        (c2, 'v1'),
        (c3, 'v1'),
        (c4, 'v2'),
    ])

    assert groups == [
        rnv.VersionGroup(version='v1', changes=(c1,)),
        rnv.VersionGroup(version='v2', changes=(c2, c3, c4)),
    ]
    assert groups[1].target_commit == 'c4'


def test_group_by_version_ignores_previously_seen_versions():
    c1, c2, c3, c4 = _commits(4)

    groups = rnv.group_by_version([
        (c1, 'v1'),
        (c2, 'v2'),
        (c3, 'v1'),
        (c4, 'v3'),
    ])

    assert [(g.version, g.changes) for g in groups] == [
        ('v1', (c1,)),
        ('v2', (c2,)),
        ('v3', (c3, c4)),
    ]


def test_group_by_version_omits_trailing_commits():
    c1, c2, c3 = _commits(3)

    groups = rnv.group_by_version([
        (c1, 'v1'),
        (c2, 'v2'),
        (c3, 'v2'),
    ])

    assert [g.version for g in groups] == ['v1', 'v2']
    assert groups[1].changes == (c2,)


def test_group_by_version_empty():
    assert rnv.group_by_version([]) == []


def test_versioned_commits_from_json_manifests():
    c1, c2, c3, c4 = commits = _commits(4)
    git_helper = ManifestsByCommit({
        'c1': json.dumps({'name': 'lib', 'version': 'v1.0.0'}),
        'c2': json.dumps({'name': 'lib', 'version': 'v1.0.0'}),
        'c3': json.dumps({'name': 'lib', 'version': 'v1.1.0'}),
        'c4': json.dumps({'name': 'lib', 'version': '2.0.0'}),
    })

    versioned_commits = list(rnv.iter_versioned_commits(
        git_helper=git_helper,
        commits=commits,
        manifest_path='package.json',
    ))

    assert versioned_commits == [(c1, 'v1'), (c2, 'v1'), (c3, 'v1'), (c4, 'v2')]
    assert git_helper.requested[0] == ('c1', 'package.json')


def test_manifest_version_from_yaml_manifest():
    git_helper = ManifestsByCommit({'c1': 'name: lib\nversion: 3.2.1\n'})

    assert rnv.manifest_version(
        git_helper=git_helper,
        commit=Commit(hash='c1', message=''),
        manifest_path='meta/manifest.yaml',
    ) == 'v3'


@pytest.mark.parametrize('raw,path', [
    ('{"version": "1.0"}', 'package.json'),
    ('{"version": "1.0.0-rc.1"}', 'package.json'),
    ('{"name": "no-version"}', 'package.json'),
    ('{"version": 1}', 'package.json'),
    ('not json', 'package.json'),
    ('["1.0.0"]', 'package.json'),
    ('version: 1.0', 'manifest.yml'),
    ('version: [', 'manifest.yml'),
])
def test_manifest_version_rejects_invalid_manifests(raw, path):
    git_helper = ManifestsByCommit({'c1': raw})

    with pytest.raises(rnv.ManifestError) as exc_info:
        rnv.manifest_version(
            git_helper=git_helper,
            commit=Commit(hash='c1', message=''),
            manifest_path=path,
        )

    assert 'c1' in str(exc_info.value)


def test_invalid_manifest_names_offending_version():
    git_helper = ManifestsByCommit({'c1': '{"version": "1.0"}'})

    with pytest.raises(rnv.ManifestError, match="'1.0' @ c1"):
        rnv.manifest_version(
            git_helper=git_helper,
            commit=Commit(hash='c1', message=''),
            manifest_path='package.json',
        )
