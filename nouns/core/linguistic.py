"""
Linguistic helpers for noun and verb naming.

Infers plural forms, verb conjugations and event names so that a noun can
be declared from its type name alone.

Usage:
    pluralize("category")          # "categories"
    conjugate("publish").activity  # "publishing"
    type_meta("BlogPost").slug     # "blog-post"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from nouns.core.models.noun import Verb


# ============================================================================
# Tables
# ============================================================================

IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "half": "halves",
    "self": "selves",
    "calf": "calves",
    "analysis": "analyses",
    "crisis": "crises",
    "thesis": "theses",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "phenomenon": "phenomena",
}

IRREGULAR_SINGULARS: dict[str, str] = {v: k for k, v in IRREGULAR_PLURALS.items()}

# Verbs ending consonant-vowel-consonant that double the final letter.
DOUBLING_VERBS = frozenset("""
    submit commit permit omit admit emit transmit refer prefer defer occur recur
    begin stop drop shop plan scan ban run gun stun cut shut hit sit fit spit quit
    knit get set pet wet bet let put drag brag flag tag bag nag wag hug bug mug tug
    rub scrub grab stab rob sob throb nod prod plod plot rot blot spot knot trot
    chat pat bat mat rat slap clap flap tap wrap snap trap cap map nap zap tip sip
    dip rip zip slip trip drip chip clip flip grip ship skip whip strip equip hop
    pop mop cop chop crop prop flop swim trim slim skim dim rim brim grim hem stem
    jam cram ram slam dam ham scam spam tram hum drum strum sum gum chum plum
    star scar spar blur stir swap swat plug shrug blog flog snag transfer confer
    infer deter control patrol compel expel propel excel
""".split())

VERB_PREFIXES = ("re", "un", "out", "over", "under", "up", "with")

# Past participles the suffix rules get wrong; used when matching events.
IRREGULAR_PARTICIPLES: dict[str, str] = {
    "send": "sent",
    "build": "built",
    "pay": "paid",
    "buy": "bought",
    "sell": "sold",
    "write": "written",
    "read": "read",
    "begin": "begun",
    "run": "run",
    "hold": "held",
    "bind": "bound",
    "lose": "lost",
    "find": "found",
    "put": "put",
    "set": "set",
    "reset": "reset",
    "shut": "shut",
    "cut": "cut",
    "split": "split",
    "broadcast": "broadcast",
    "forward": "forwarded",
    "leave": "left",
    "meet": "met",
    "undo": "undone",
    "redo": "redone",
    "withdraw": "withdrawn",
    "upload": "uploaded",
}

KNOWN_VERBS: dict[str, Verb] = {
    "create": Verb(
        action="create",
        actor="creator",
        act="creates",
        activity="creating",
        result="creation",
        reverse={"at": "createdAt", "by": "createdBy", "in": "createdIn", "for": "createdFor"},
        inverse="delete",
    ),
    "update": Verb(
        action="update",
        actor="updater",
        act="updates",
        activity="updating",
        result="update",
        reverse={"at": "updatedAt", "by": "updatedBy"},
    ),
    "delete": Verb(
        action="delete",
        actor="deleter",
        act="deletes",
        activity="deleting",
        result="deletion",
        reverse={"at": "deletedAt", "by": "deletedBy"},
        inverse="create",
    ),
    "publish": Verb(
        action="publish",
        actor="publisher",
        act="publishes",
        activity="publishing",
        result="publication",
        reverse={"at": "publishedAt", "by": "publishedBy"},
        inverse="unpublish",
    ),
    "archive": Verb(
        action="archive",
        actor="archiver",
        act="archives",
        activity="archiving",
        result="archive",
        reverse={"at": "archivedAt", "by": "archivedBy"},
        inverse="unarchive",
    ),
}

DEFAULT_ACTIONS = ("create", "update", "delete")
DEFAULT_EVENTS = ("created", "updated", "deleted")

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


# ============================================================================
# Internal Helpers
# ============================================================================


def _is_vowel(char: str) -> bool:
    return bool(char) and char.lower() in "aeiou"


def _preserve_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _ends_consonant_y(word: str) -> bool:
    return len(word) >= 2 and word.endswith("y") and not _is_vowel(word[-2])


def _should_double(verb: str) -> bool:
    """Check the consonant-vowel-consonant doubling rule."""
    if len(verb) < 2:
        return False
    last, second_last = verb[-1], verb[-2]
    if last in "wxy":
        return False
    if _is_vowel(last) or not _is_vowel(second_last):
        return False
    if len(verb) >= 3 and _is_vowel(verb[-3]):
        return False
    if len(verb) <= 3 or verb in DOUBLING_VERBS:
        return True
    # Prefixed forms double like their base: resubmit, unwrap, unpin.
    return any(
        verb.startswith(prefix) and len(verb) - len(prefix) >= 3 and _should_double(verb[len(prefix):])
        for prefix in VERB_PREFIXES
    )


def _irregular_participle(verb: str) -> str | None:
    if verb in IRREGULAR_PARTICIPLES:
        return IRREGULAR_PARTICIPLES[verb]
    for prefix in VERB_PREFIXES:
        base = verb[len(prefix):]
        if verb.startswith(prefix) and base in IRREGULAR_PARTICIPLES:
            return prefix + IRREGULAR_PARTICIPLES[base]
    return None


def _with_suffix(verb: str, e_suffix: str, y_suffix: str, suffix: str) -> str:
    if verb.endswith("e"):
        return verb + e_suffix
    if _ends_consonant_y(verb):
        return verb[:-1] + y_suffix
    if _should_double(verb):
        return verb + verb[-1] + suffix
    return verb + suffix


# ============================================================================
# Nouns
# ============================================================================


def split_camel_case(name: str) -> list[str]:
    """Split a CamelCase type name into words ("BlogPost" -> ["Blog", "Post"])."""
    return _CAMEL_BOUNDARY.sub(r"\1 \2", name).split()


def pluralize(singular: str) -> str:
    """Pluralize an English noun.

    Examples:
        pluralize("post")      -> "posts"
        pluralize("category")  -> "categories"
        pluralize("Person")    -> "People"
        pluralize("quiz")      -> "quizzes"
    """
    lower = singular.lower()

    if lower in IRREGULAR_PLURALS:
        return _preserve_case(singular, IRREGULAR_PLURALS[lower])

    if _ends_consonant_y(lower):
        return singular[:-1] + "ies"
    if lower.endswith("z") and not lower.endswith("zz"):
        return singular + "zes"
    if lower.endswith(("s", "x", "zz", "ch", "sh")):
        return singular + "es"
    if lower.endswith("f"):
        return singular[:-1] + "ves"
    if lower.endswith("fe"):
        return singular[:-2] + "ves"
    return singular + "s"


def singularize(plural: str) -> str:
    """Reverse of pluralize for the common suffix rules."""
    lower = plural.lower()

    if lower in IRREGULAR_SINGULARS:
        return _preserve_case(plural, IRREGULAR_SINGULARS[lower])

    if lower.endswith("ies"):
        return plural[:-3] + "y"
    if lower.endswith("ves"):
        return plural[:-3] + "f"
    if lower.endswith(("sses", "xes", "zes", "ches", "shes")):
        return plural[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return plural[:-1]
    return plural


@dataclass(frozen=True)
class InferredNoun:
    """Naming inferred from a bare type name."""

    singular: str
    plural: str
    actions: tuple[str, ...] = DEFAULT_ACTIONS
    events: tuple[str, ...] = DEFAULT_EVENTS


def infer_noun(type_name: str) -> InferredNoun:
    """Infer singular/plural and default verbs from a type name.

    Example:
        infer_noun("BlogPost") -> InferredNoun(singular="blog post", plural="blog posts", ...)
    """
    words = split_camel_case(type_name) or [type_name]
    singular = " ".join(words).lower()
    plural = " ".join(words[:-1] + [pluralize(words[-1])]).lower()
    return InferredNoun(singular=singular, plural=plural)


@dataclass(frozen=True)
class TypeMeta:
    """Naming metadata for a type, derived from its name."""

    name: str
    singular: str
    plural: str
    slug: str
    slug_plural: str
    creator: str = "creator"
    created_at: str = "createdAt"
    created_by: str = "createdBy"
    updated_at: str = "updatedAt"
    updated_by: str = "updatedBy"

    @property
    def created(self) -> str:
        return f"{self.name}.created"

    @property
    def updated(self) -> str:
        return f"{self.name}.updated"

    @property
    def deleted(self) -> str:
        return f"{self.name}.deleted"


@lru_cache(maxsize=1024)
def type_meta(type_name: str) -> TypeMeta:
    """Get (cached) naming metadata for a type name."""
    noun = infer_noun(type_name)
    return TypeMeta(
        name=type_name,
        singular=noun.singular,
        plural=noun.plural,
        slug=re.sub(r"\s+", "-", noun.singular),
        slug_plural=re.sub(r"\s+", "-", noun.plural),
    )


# ============================================================================
# Verbs
# ============================================================================


def past_participle(verb: str) -> str:
    """create -> created, submit -> submitted, apply -> applied."""
    return _with_suffix(verb, "d", "ied", "ed")


def event_for_action(action: str) -> str:
    """Event label for an action: create -> created, unhold -> unheld, star -> starred.

    Irregular participles are looked up first, also behind a prefix
    (un-, re-, with-, ...); everything else follows the suffix rules.
    """
    verb = action.lower()
    return _irregular_participle(verb) or past_participle(verb)


def conjugate(action: str) -> Verb:
    """Conjugate a verb from its base form.

    Known verbs come from KNOWN_VERBS (which also carry an inverse);
    anything else is derived with suffix rules.

    Example:
        conjugate("publish")
        # Verb(action="publish", actor="publisher", act="publishes",
        #      activity="publishing", result="publication", ...)
    """
    if action in KNOWN_VERBS:
        return KNOWN_VERBS[action].model_copy(deep=True)

    base = action.lower()
    participle = past_participle(base)

    if _ends_consonant_y(base):
        act = base[:-1] + "ies"
    elif base.endswith(("s", "x", "z", "ch", "sh")):
        act = base + "es"
    else:
        act = base + "s"

    if base.endswith("ie"):
        activity = base[:-2] + "ying"
    elif base.endswith("e") and not base.endswith("ee"):
        activity = base[:-1] + "ing"
    elif _should_double(base):
        activity = base + base[-1] + "ing"
    else:
        activity = base + "ing"

    if base.endswith("ate"):
        result = base[:-1] + "ion"
    elif base.endswith("ify"):
        result = base[:-1] + "ication"
    elif base.endswith("ize"):
        result = base[:-1] + "ation"
    elif base.endswith("e"):
        result = base[:-1] + "ion"
    else:
        result = base + "ion"

    return Verb(
        action=base,
        actor=_with_suffix(base, "r", "ier", "er"),
        act=act,
        activity=activity,
        result=result,
        reverse={
            "at": f"{participle}At",
            "by": f"{participle}By",
            "in": f"{participle}In",
            "for": f"{participle}For",
        },
    )


def event_names_for_action(action: str) -> list[str]:
    """Candidate event labels a catalog may use for an action.

    Compound actions are matched both ways the catalogs spell them:
    "addField" -> ["addedField", "fieldAdded"].
    """
    words = split_camel_case(action)
    if not words:
        return []

    verb = words[0].lower()
    participles = [event_for_action(verb)]
    # British spelling doubles a final l: cancelled, labelled.
    if verb.endswith("l") and len(verb) > 2 and _is_vowel(verb[-2]) and not _is_vowel(verb[-3]):
        participles.append(verb + "led")

    if len(words) == 1:
        return participles

    rest = "".join(words[1:])
    obj = rest[:1].lower() + rest[1:]
    names = [participle + rest for participle in participles]
    names += [obj + participle[:1].upper() + participle[1:] for participle in participles]
    return names
