"""
Memory stories for kanji.

A short, template-based mnemonic built from the item's meaning, radical and
readings. The template is picked with an injected ``random.Random``.
"""

import random

from kanzi.domain.models import KanjiItem

STORY_TEMPLATES = (
    "The character {kanji} was born when people long ago drew a picture of "
    "\"{meaning}\". Its radical {radical} is the part it grew from. Read it as "
    "\"{main_kun}\" and try using {kanji} in a sentence today!",
    "Look closely at {kanji}. Its radical is {radical}, and it has to do with "
    "{meaning}. In ancient China this character started out as a picture. "
    "The on reading is \"{main_on}\" and the kun reading is \"{main_kun}\". "
    "Look for places where you see it every day!",
    "We write {meaning} as {kanji}. Read it \"{main_on}\" (on) or "
    "\"{main_kun}\" (kun). The radical {radical} is the key to this kanji. "
    "Find five words that contain it!",
)


def generate_story(item: KanjiItem, rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    main_on = item.on_readings[0] if item.on_readings else ""
    main_kun = item.kun_readings[0] if item.kun_readings else main_on

    template = rng.choice(STORY_TEMPLATES)
    return template.format(
        kanji=item.character,
        meaning=item.meaning,
        radical=item.radical or item.character,
        main_on=main_on or "-",
        main_kun=main_kun or "-",
    )
