"""Shuffler - Embaralhamento Fisher-Yates com mapa de indices originais."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ShuffleResult(Generic[T]):
    """Permutacao de uma sequencia e o mapa de volta as posicoes originais.

    Attributes:
        shuffled: Elementos na nova ordem
        original_indices: `original_indices[nova_posicao] == posicao_original`
    """

    shuffled: list[T]
    original_indices: list[int]

    def new_position(self, original_index: int) -> int:
        """Posicao atual do elemento que estava em `original_index`."""
        return self.original_indices.index(original_index)


def shuffle(sequence: Sequence[T], rng: random.Random | None = None) -> ShuffleResult[T]:
    """Embaralha uma copia da sequencia (Fisher-Yates).

    Percorre `i` do ultimo indice ate 1, sorteia `j` uniforme em `[0, i]`
    e troca elemento e rastreador de indice. Com fonte aleatoria sem vies,
    todas as n! permutacoes sao equiprovaveis. A entrada nao e alterada.

    Args:
        sequence: Sequencia finita (vazia e valida)
        rng: Fonte aleatoria; padrao e o gerador global de `random`

    Returns:
        ShuffleResult com a permutacao e o mapa de indices originais

    Example:
        >>> result = shuffle(["A", "B", "C"], random.Random(7))
        >>> sorted(result.shuffled)
        ['A', 'B', 'C']
    """
    randint = rng.randint if rng is not None else random.randint
    shuffled = list(sequence)
    original_indices = list(range(len(shuffled)))

    for i in range(len(shuffled) - 1, 0, -1):
        j = randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        original_indices[i], original_indices[j] = original_indices[j], original_indices[i]

    return ShuffleResult(shuffled=shuffled, original_indices=original_indices)
