import json
import tempfile
import unittest
from pathlib import Path
from typing import Dict, List

from crossfill.core.exceptions import DictionaryLoadError, WordSourceError
from crossfill.data.dictionary import DictionaryConfig, WordDictionary
from crossfill.data.normalization import clean_hint, clean_word, is_placeholder_key, matches_hint


class StubSource:
    def __init__(self, results: Dict[str, Dict[int, List[str]]], fail: bool = False) -> None:
        self.results = results
        self.fail = fail
        self.requested: List[str] = []

    def fetch(self, key: str) -> Dict[int, List[str]]:
        self.requested.append(key)
        if self.fail:
            raise WordSourceError(f"cannot reach source for {key}")
        return self.results.get(key, {})


class NormalizationTests(unittest.TestCase):
    def test_clean_word(self) -> None:
        self.assertEqual(clean_word("  sol "), "SOL")
        self.assertEqual(clean_word("two words"), "")
        self.assertEqual(clean_word(""), "")

    def test_clean_hint(self) -> None:
        self.assertEqual(clean_hint(None, 3), "...")
        self.assertEqual(clean_hint("a.c", 3), "A.C")
        with self.assertRaises(ValueError):
            clean_hint("ab", 3)

    def test_matches_hint(self) -> None:
        self.assertTrue(matches_hint("CAT", "C.T"))
        self.assertFalse(matches_hint("COT", ".A."))
        self.assertFalse(matches_hint("CATS", "C.T"))

    def test_placeholder_keys(self) -> None:
        self.assertTrue(is_placeholder_key("xxxx1"))
        self.assertFalse(is_placeholder_key("sun"))


class DictionaryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmpdir = Path(self._tmp.name)

    def _write(self, payload: object) -> Path:
        path = self.tmpdir / "dict.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_missing_file_starts_empty(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(path=self.tmpdir / "none.json"))
        self.assertEqual(dictionary.keys(), [])
        self.assertEqual(dictionary.lookup("animal", 3), [])
        self.assertFalse(dictionary.changed)

    def test_lookup_filters_by_length_and_hint(self) -> None:
        path = self._write({"words": {"animal": {"3": ["cat", "dog", "Cow"], "4": ["bear"]}}})
        dictionary = WordDictionary(DictionaryConfig(path=path, fetch_missing=False))
        self.assertEqual(dictionary.lookup("animal", 3), ["CAT", "DOG", "COW"])
        self.assertEqual(dictionary.lookup("animal", 3, "c.."), ["CAT", "COW"])
        self.assertEqual(dictionary.lookup("animal", 4, "...R"), ["BEAR"])
        self.assertEqual(dictionary.lookup("animal", 5), [])
        self.assertTrue(dictionary.contains("animal", "cat"))

    def test_wrong_length_hint_is_rejected(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(path=self.tmpdir / "none.json"))
        with self.assertRaises(ValueError):
            dictionary.lookup("animal", 3, "....")

    def test_invalid_json_raises(self) -> None:
        path = self.tmpdir / "dict.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(DictionaryLoadError):
            WordDictionary(DictionaryConfig(path=path))

    def test_unknown_key_is_fetched_once(self) -> None:
        source = StubSource({"river": {4: ["nile", "Oder"], 5: ["rhine", "two  words"]}})
        dictionary = WordDictionary(
            DictionaryConfig(path=self.tmpdir / "none.json", source=source)
        )
        self.assertEqual(dictionary.lookup("river", 4), ["NILE", "ODER"])
        self.assertEqual(dictionary.lookup("river", 5, "R...."), ["RHINE"])
        self.assertEqual(source.requested, ["river"])
        self.assertTrue(dictionary.changed)

    def test_fetch_skipped_when_disabled_or_placeholder(self) -> None:
        source = StubSource({"river": {4: ["NILE"]}})
        disabled = WordDictionary(
            DictionaryConfig(path=self.tmpdir / "none.json", fetch_missing=False, source=source)
        )
        self.assertEqual(disabled.lookup("river", 4), [])
        enabled = WordDictionary(DictionaryConfig(path=self.tmpdir / "none.json", source=source))
        self.assertEqual(enabled.lookup("xxxx3", 4), [])
        self.assertEqual(source.requested, [])

    def test_failed_fetch_is_logged_and_not_retried(self) -> None:
        source = StubSource({}, fail=True)
        dictionary = WordDictionary(
            DictionaryConfig(path=self.tmpdir / "none.json", source=source)
        )
        with self.assertLogs("crossfill.data.dictionary", level="WARNING"):
            self.assertEqual(dictionary.lookup("river", 4), [])
        self.assertEqual(dictionary.lookup("river", 4), [])
        self.assertEqual(source.requested, ["river"])
        self.assertFalse(dictionary.changed)

    def test_add_word(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(path=self.tmpdir / "none.json"))
        self.assertTrue(dictionary.add_word("animal", "cat"))
        self.assertTrue(dictionary.changed)
        self.assertFalse(dictionary.add_word("animal", "CAT"))
        self.assertFalse(dictionary.add_word("xxxx1", "DOG"))
        self.assertFalse(dictionary.add_word("animal", "big cat"))
        self.assertEqual(dictionary.add_words("animal", ["dog", "cat", "cow"]), 2)
        self.assertEqual(dictionary.lookup("animal", 3), ["CAT", "DOG", "COW"])

    def test_save_and_reload(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(path=self.tmpdir / "dict.json"))
        dictionary.add_word("animal", "cat")
        dictionary.add_word("animal", "bear")
        saved = dictionary.save()
        self.assertFalse(dictionary.changed)
        payload = json.loads(saved.read_text(encoding="utf-8"))
        self.assertEqual(payload, {"words": {"animal": {"3": ["CAT"], "4": ["BEAR"]}}})

        reloaded = WordDictionary(DictionaryConfig(path=saved, fetch_missing=False))
        self.assertEqual(reloaded.lookup("animal", 4), ["BEAR"])

    def test_save_to_other_path_updates_default(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(path=self.tmpdir / "dict.json"))
        dictionary.add_word("animal", "cat")
        other = self.tmpdir / "copy.json"
        self.assertEqual(dictionary.save(other), other)
        self.assertEqual(dictionary.path, other)
        self.assertTrue(other.exists())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
