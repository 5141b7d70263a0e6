import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def _requirements(fname: str):
    with open(os.path.join(own_dir, fname)) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            yield line


def modules():
    return [
        'gitutil',
        'version',
    ]


def packages():
    return [
        'ci',
        'github',
        'release_notes',
    ]


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='draft-releases',
    version=version(),
    description='Draft GitHub-releases from manifest version changes and RELNOTES annotations',
    python_requires='>=3.11',
    py_modules=modules(),
    packages=packages(),
    install_requires=list(_requirements('requirements.txt')),
    extras_require={
        'test': list(_requirements('requirements.test.txt')),
    },
    entry_points={
        'console_scripts': [
            'draft-releases = release_notes.cli:main',
        ],
    },
)
