"""
Index builder: loads document collections into a SearchEngine.

Supported sources:
- tagged document stream: `<DOC 12 >` ... `</DOC>`, whitespace separated
- SQuAD-style JSON Lines: one {"context": ..., "qas": [...]} record per line
- a directory of HTML files, one document per file

Malformed input is fatal: loaders raise IngestionError and no partially
built engine should be used.
"""

import json
import logging
from pathlib import Path

from .engine import SearchEngine
from .tokenizer import extract_text_from_html, read_html_file

logger = logging.getLogger(__name__)

DOC_OPEN_TAG = "<DOC"
DOC_CLOSE_TAG = "</DOC>"


class IngestionError(ValueError):
    """Raised when a collection file cannot be read or is malformed."""


def _read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Unable to read {path}: {e}") from e


def _parse_doc_id(raw: str, path: Path) -> int:
    try:
        doc_id = int(raw)
    except ValueError:
        raise IngestionError(f"{path}: invalid document id {raw!r}") from None
    if doc_id <= 0:
        raise IngestionError(f"{path}: document id must be positive, got {doc_id}")
    return doc_id


def _add_document(engine: SearchEngine, doc_id: int, text: str, path: Path, title: str = "") -> None:
    try:
        engine.add_document(doc_id, text, title=title)
    except ValueError as e:
        raise IngestionError(f"{path}: {e}") from e


def load_tagged_file(engine: SearchEngine, path: Path) -> int:
    """
    Load documents delimited by `<DOC id >` and `</DOC>` tags.
    Text outside of a document is ignored. Returns the number of documents added.
    """
    path = Path(path)
    tokens = _read_text(path).split()

    added = 0
    doc_id: int | None = None
    body: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == DOC_OPEN_TAG:
            if doc_id is not None:
                raise IngestionError(f"{path}: document {doc_id} is not closed")
            if i + 1 >= len(tokens):
                raise IngestionError(f"{path}: missing document id after {DOC_OPEN_TAG}")
            raw_id = tokens[i + 1]
            if raw_id.endswith(">"):
                doc_id = _parse_doc_id(raw_id[:-1], path)
                i += 2
            else:
                doc_id = _parse_doc_id(raw_id, path)
                if i + 2 >= len(tokens) or tokens[i + 2] != ">":
                    raise IngestionError(f"{path}: expected '>' after document id {doc_id}")
                i += 3
            body = []
            continue
        if token == DOC_CLOSE_TAG:
            if doc_id is None:
                raise IngestionError(f"{path}: {DOC_CLOSE_TAG} without an open document")
            _add_document(engine, doc_id, " ".join(body), path)
            added += 1
            doc_id = None
        elif doc_id is not None:
            body.append(token)
        i += 1

    if doc_id is not None:
        raise IngestionError(f"{path}: document {doc_id} is not closed")

    logger.info("Loaded %d documents from %s (%d terms in index)", added, path, len(engine.index))
    return added


def load_squad_file(engine: SearchEngine, path: Path, tokenize_collection: bool = False) -> int:
    """
    Load SQuAD-style records from a JSON Lines file.

    Each record's "context" becomes a document with the next sequential id,
    so several files can be loaded into one engine.

    With tokenize_collection, question and answer text is indexed under the
    sentinel id and a normalized copy of the records is written to
    "<path>.tokenized".
    """
    path = Path(path)
    lines = _read_text(path).splitlines()

    tokenized_records: list[dict] = []
    normalize = engine.normalizer
    added = 0
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise IngestionError(f"{path}:{line_no}: malformed record: {e}") from e
        if not isinstance(record, dict) or not isinstance(record.get("context"), str):
            raise IngestionError(f"{path}:{line_no}: record has no 'context' field")

        context = record["context"]
        _add_document(engine, engine.next_doc_id, context, path)
        added += 1

        if not tokenize_collection:
            continue

        qas = []
        for qa in record.get("qas", []):
            if not isinstance(qa, dict):
                raise IngestionError(f"{path}:{line_no}: malformed 'qas' entry")
            question = qa.get("question", "")
            engine.add_sentinel_text(question)
            answers = []
            for answer in qa.get("answers", []):
                if not isinstance(answer, dict):
                    raise IngestionError(f"{path}:{line_no}: malformed answer entry")
                answer_text = answer.get("text", "")
                engine.add_sentinel_text(answer_text)
                answers.append({"text": " ".join(normalize(answer_text))})
            qas.append({"question": " ".join(normalize(question)), "id": qa.get("id"), "answers": answers})
        tokenized_records.append({"context": " ".join(normalize(context)), "qas": qas})

    if tokenize_collection:
        tokenized_path = path.with_name(path.name + ".tokenized")
        try:
            with open(tokenized_path, "w", encoding="utf-8") as f:
                for obj in tokenized_records:
                    f.write(json.dumps(obj, ensure_ascii=False) + "\n")
        except OSError as e:
            raise IngestionError(f"Unable to write {tokenized_path}: {e}") from e
        logger.info("Tokenized collection saved to %s", tokenized_path)

    logger.info("Loaded %d documents from %s (%d terms in index)", added, path, len(engine.index))
    return added


def load_html_directory(engine: SearchEngine, data_dir: Path) -> int:
    """
    Index every .html file under data_dir (recursive, sorted by path).
    Each file gets the next sequential document id; its title is the
    path relative to data_dir.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise IngestionError(f"Not a directory: {data_dir}")

    added = 0
    for filepath in sorted(data_dir.rglob("*.html"), key=lambda p: str(p)):
        try:
            content = read_html_file(filepath)
        except (OSError, ValueError) as e:
            raise IngestionError(f"Unable to read {filepath}: {e}") from e
        title = str(filepath.relative_to(data_dir)).replace("\\", "/")
        _add_document(engine, engine.next_doc_id, extract_text_from_html(content), filepath, title=title)
        added += 1

    logger.info("Loaded %d documents from %s (%d terms in index)", added, data_dir, len(engine.index))
    return added
