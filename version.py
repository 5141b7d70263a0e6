# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import re

import semver

# deliberately stricter than semver: no prerelease, no build-metadata
_manifest_version_pattern = re.compile(r'v?(\d+)\.(\d+)\.(\d+)')


def parse_manifest_version(
    version,
) -> semver.VersionInfo:
    '''
    parses a manifest's version-string (`[v]MAJOR.MINOR.PATCH`) into a semver.VersionInfo object.

    Different from `semver.VersionInfo.parse`, an optional `v` prefix is accepted, while
    prerelease and build-metadata suffixes are rejected.

    raises ValueError if the given version does not have the expected shape.
    '''
    if isinstance(version, semver.VersionInfo):
        return version
    if not isinstance(version, str):
        raise ValueError(f'version must be a str, got {type(version)=}')

    if not (match := _manifest_version_pattern.fullmatch(version)):
        raise ValueError(f'not a valid [v]MAJOR.MINOR.PATCH version: {version!r}')

    major, minor, patch = (int(group) for group in match.groups())

    return semver.VersionInfo(
        major=major,
        minor=minor,
        patch=patch,
    )


def major_version_key(version) -> str:
    '''
    returns the key used for grouping releases by major version (e.g. `v3` for `3.1.4`)
    '''
    return f'v{parse_manifest_version(version).major}'
