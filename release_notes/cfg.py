import dataclasses
import os

import dacite
import yaml


class ConfigurationError(ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class DrafterCfg:
    '''
    repo_url: github-repo-url ({host}/{org}/{repo}); derived from GitHub-Actions-Env-Vars if unset
    manifest_path: path (relative to repository root) of manifest declaring the version
    release_name_template: format-string for release-names (`version` is substituted)
    user_agent: user-agent to send to GitHub-API
    head: upper boundary of commits to consider
    '''
    repo_url: str | None = None
    manifest_path: str = 'package.json'
    release_name_template: str = '{version}'
    user_agent: str | None = None
    head: str = 'HEAD'

    def release_name(self, version: str) -> str:
        return self.release_name_template.format(version=version)


def load_cfg(path: str) -> DrafterCfg:
    if not os.path.isfile(path):
        raise ConfigurationError(f'not an existing file: {path}')

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return DrafterCfg()

    if not isinstance(raw, dict):
        raise ConfigurationError(f'expected a mapping in {path}, got {type(raw)=}')

    try:
        return dacite.from_dict(
            data_class=DrafterCfg,
            data=raw,
            config=dacite.Config(strict=True),
        )
    except dacite.DaciteError as e:
        raise ConfigurationError(f'invalid configuration in {path}: {e}') from e


def merge_cfg(
    cfg: DrafterCfg,
    **overrides,
) -> DrafterCfg:
    '''
    returns a copy of the given cfg, with all overrides applied that are not None
    '''
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(cfg, **overrides)
