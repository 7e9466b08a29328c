"""Whitelist of verbs accepted as the first word of a subject line."""
import re
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional

from .config import ConfigurationError

# Frequent English verbs which read naturally in imperative mood at the
# start of a commit subject.
BUILTIN_VERBS: FrozenSet[str] = frozenset(
    """
    abandon abort accept access accommodate account accumulate achieve
    acquire activate adapt add address adjust adopt advance advertise align
    allocate allow alter amend analyze animate annotate announce anonymize
    append apply approve archive arrange assemble assert assign associate
    assume attach attempt audit augment authenticate authorize automate
    avoid backport ban base batch begin benchmark bind block bootstrap bound
    break bring broaden buffer build bump bundle bypass cache calculate call
    cancel canonicalize capitalize capture cast catch centralize change
    check choose clarify classify clean cleanup clear clip clone close
    coerce collapse collect combine comment commit compare compile complete
    compose compress compute concatenate condense configure confirm connect
    consider consolidate constrain construct consume contain continue
    control convert copy correct count cover crash create crop cut
    deactivate debug decide declare decode decompose decouple decrease
    dedent deduplicate default defer define delay delegate delete deliver
    demonstrate deny deploy deprecate derive describe deserialize design
    destroy detach detect determine develop diagnose differentiate disable
    disallow discard disconnect discover dispatch display distinguish
    distribute divide document downgrade download drop dump duplicate echo
    edit elaborate eliminate embed emit empty emulate enable encapsulate
    encode encourage end enforce enhance enlarge ensure enter enumerate
    escape establish estimate evaluate examine exclude execute exempt exit
    expand expect experiment explain expose express extend extract factor
    fail fake fetch fill filter finalize find finish fix flag flatten flip
    flush fold follow force fork format forward free freeze generalize
    generate get give group guard halt handle harden hardcode hash hide
    highlight hoist hook hotfix identify ignore illustrate implement import
    improve include incorporate increase increment indent index infer
    inherit initialize inject inline insert inspect install instantiate
    instrument integrate intercept internalize interpret introduce
    invalidate invert investigate invoke isolate iterate join justify keep
    kill label launch layout lay leave let lift limit link lint list load
    localize lock log look loosen lower maintain make manage map mark match
    measure memoize merge migrate minimize mirror mock modernize modify
    monitor mount move mute name narrow navigate negate nest normalize note
    notify nullify obey obtain offer omit open optimize order organize
    output overhaul override overwrite package pad paginate parallelize
    parameterize parametrize parse partition pass patch pause perform permit
    persist pick pin place plot polish populate port post postpone prefer
    prefix prepare prepend preserve pretty prevent print prioritize process
    produce profile prohibit promote prompt propagate propose protect
    provide prune publish pull purge push put query queue quote raise rate
    reach read rebase rebuild recalculate receive recognize record recover
    redefine redesign redirect redo reduce refactor reference refine
    reformat refresh register regroup reimplement reindex reintroduce reject
    relax release reload relocate remember remove rename reorder reorganize
    repair rephrase replace report reposition represent request require
    rerun rescale reserve reset reshape resize resolve respect restore
    restrict restructure retain rethrow retrieve retry return reuse reveal
    revert review revise reword rewrite rollback rotate round route run
    sanitize save scale scan schedule scope scroll search secure seed select
    send separate serialize serve set setup share shift ship shorten show
    shrink shuffle shutdown sign simplify simulate skip slow snapshot sort
    specify speed split squash stabilize stage standardize start stash
    state stop store stream streamline strengthen strip structure stub style
    submit subscribe substitute subtract suggest supply support suppress
    swap switch synchronize sync tag take target teach tell terminate test
    throw tidy tighten toggle track train transfer transform translate
    transpose treat trigger trim truncate try tune turn tweak type unblock
    uncomment underline undo unescape unfreeze unify uninstall unlock unmark
    unmount unpack unpin unregister unset unskip unwrap update upgrade
    upload use utilize validate vectorize verify version visit wait warn
    watch whitelist widen work wrap write yield
    """.split()
)

_DELIMITER_RE = re.compile(r"[,;]")


def parse_verbs(text: str) -> Iterator[str]:
    """Yield lowercase verbs from newline-, comma- or semicolon-delimited text."""
    for line in text.splitlines():
        for part in _DELIMITER_RE.split(line):
            verb = part.strip()
            if verb:
                yield verb.lower()


def read_verbs_file(path: Path) -> Iterator[str]:
    """Read additional verbs from a file in the delimited format.

    Raises:
        ConfigurationError: If the path does not point to a readable file
    """
    if not path.is_file():
        raise ConfigurationError(
            f"The file referenced by path-to-additional-verbs could not be found: {path}"
        )
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"The file referenced by path-to-additional-verbs could not be read: {path}: {e}"
        ) from e
    return parse_verbs(text)


class VerbLexicon:
    """Case-insensitive, immutable set of accepted imperative verbs."""

    def __init__(self, verbs: Iterable[str] = ()):
        self._verbs: FrozenSet[str] = frozenset(verbs)

    @classmethod
    def from_sources(
        cls,
        additional_verbs: Optional[str] = None,
        path_to_additional_verbs: Optional[str] = None,
        builtin: Iterable[str] = BUILTIN_VERBS,
    ) -> "VerbLexicon":
        """Build the lexicon as the union of inline text, a file and the built-in list.

        Args:
            additional_verbs: Delimited verbs given inline
            path_to_additional_verbs: Path to a file with delimited verbs; ignored if empty
            builtin: Built-in verbs

        Returns:
            VerbLexicon: Lexicon containing the verbs of all sources
        """
        verbs = {verb.lower() for verb in builtin}
        if additional_verbs:
            verbs.update(parse_verbs(additional_verbs))
        if path_to_additional_verbs:
            verbs.update(read_verbs_file(Path(path_to_additional_verbs)))
        return cls(verbs)

    @property
    def verbs(self) -> FrozenSet[str]:
        return self._verbs

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._verbs

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._verbs))

    def __len__(self) -> int:
        return len(self._verbs)
