import os
import warnings
from pathlib import Path

import numpy as np
import pandas as pd
from scipy import sparse

from spkmeans_lib.constants import DOC_FILEPATH
from spkmeans_lib.errors import InvalidDocumentMatrixError

TRIPLE_COLUMNS = ['doc_id', 'word_id', 'count']


def _parse_triple(line:str):
    tokens = line.split()
    if len(tokens) < 3 :
        return None
    try :
        return int(tokens[0]), int(tokens[1]), float(tokens[2])
    except ValueError :
        return None


def _read_header(lines:list):
    """
    Returns the three header values, the tokens left on the line where the
    header ends and the index of the next line.
    """
    tokens = []
    for i, line in enumerate(lines):
        tokens += line.split()
        if len(tokens) >= 3 :
            try :
                dc, wc, nzwc = (int(t) for t in tokens[:3])
            except ValueError as e :
                raise InvalidDocumentMatrixError(f"Invalid document file header: {tokens[:3]}") from e
            return dc, wc, nzwc, tokens[3:], i + 1
    raise InvalidDocumentMatrixError("Document file header must hold the document, word and non-zero counts")


def read_triples(fname) -> tuple:
    """
    Read a document file into its header values and a DataFrame of
    (doc_id, word_id, count) triples, 1-indexed as in the file.

    FILE FORMAT:
        number of documents
        number of unique words
        number of non-zero words in the collection
        docID wordID count
        docID wordID count
        ...
    Body lines that do not start with three numbers are skipped.
    """
    with open(fname, encoding='utf-8') as f:
        lines = f.read().splitlines()
    dc, wc, nzwc, rest, start = _read_header(lines)
    if dc < 1 or wc < 1 :
        raise InvalidDocumentMatrixError(f"Document file declares {dc} documents and {wc} words")
    # Values after the header on its last line form the first body line
    body = [' '.join(rest)] + lines[start:]
    triples = [t for t in (_parse_triple(line) for line in body) if t is not None]
    df = pd.DataFrame(triples, columns=TRIPLE_COLUMNS)
    return dc, wc, nzwc, df


def triples_to_sparse(df:pd.DataFrame, dc:int, wc:int) -> sparse.csr_matrix:
    # Later entries for the same (doc, word) pair overwrite earlier ones
    df = df.drop_duplicates(subset=['doc_id', 'word_id'], keep='last')
    bad = df[(df['doc_id'] < 1) | (df['doc_id'] > dc) | (df['word_id'] < 1) | (df['word_id'] > wc)]
    if bad.shape[0] > 0 :
        first = bad.iloc[0]
        raise InvalidDocumentMatrixError(
            f"{bad.shape[0]} entries out of range for {dc} documents x {wc} words, "
            f"e.g. doc {int(first['doc_id'])}, word {int(first['word_id'])}")
    rows = df['doc_id'].to_numpy(dtype=np.intp) - 1
    cols = df['word_id'].to_numpy(dtype=np.intp) - 1
    data = df['count'].to_numpy(dtype=np.float64)
    return sparse.csr_matrix((data, (rows, cols)), shape=(dc, wc))


def load_doc_file(fname) -> tuple:
    """Returns the dense (dc, wc) document matrix, dc and wc."""
    dc, wc, _, df = read_triples(fname)
    mat = triples_to_sparse(df, dc, wc).toarray()
    return mat, dc, wc


def load_words_file(fname, wc:int) -> list:
    """
    Read the vocabulary, one word per line, line order giving the word index.
    Only the first wc lines are kept; missing words get a placeholder.
    """
    with open(fname, encoding='utf-8') as f:
        words = f.read().splitlines()[:wc]
    if len(words) < wc :
        warnings.warn(f"Vocabulary file {fname} holds {len(words)} words, expected {wc}. Using placeholders for the missing ones.")
        words += [f"word_{i}" for i in range(len(words), wc)]
    return words


class Loader :

    def __init__(self, doc_filepath = DOC_FILEPATH, vocabulary_filepath = None, verbose:bool = False):
        self.doc_filepath = Path(doc_filepath)
        self.vocabulary_filepath = Path(vocabulary_filepath) if vocabulary_filepath is not None else None
        self.verbose = verbose
        self._load_doc_file()
        if self.vocabulary_filepath is not None :
            self._load_words_file()
        else :
            self.words = None

    def _load_doc_file(self):
        if not os.path.exists(self.doc_filepath):
            raise FileNotFoundError(f"Error: file \"{self.doc_filepath}\" does not exist.")
        self.dc, self.wc, self.nzwc, self.triples = read_triples(self.doc_filepath)
        self.sparse_matrix = triples_to_sparse(self.triples, self.dc, self.wc)
        if self.verbose :
            print(f"Loaded {self.doc_filepath}: {self.dc} documents, {self.wc} words, {self.sparse_matrix.nnz} non-zero entries")

    def _load_words_file(self):
        self.words = load_words_file(self.vocabulary_filepath, self.wc)

    @property
    def matrix(self) -> np.ndarray:
        return self.sparse_matrix.toarray()
