'''
Release Drafter

Drafts GitHub releases from a repository's commit history. Release boundaries are determined by
changes of the major version declared in a manifest file (e.g. `package.json`); release notes are
collected from `RELNOTES` annotations in commit messages:

RELNOTES: some change
RELNOTES[NEW]: some new addition
RELNOTES[INC]: some backwards incompatible change

Annotations ending in `none` or `n/a` are ignored. Commits rolling back an earlier commit
(referencing it by hash) suppress the earlier commit's release note.
'''
