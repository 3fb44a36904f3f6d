"""Calculate and compare k-mer signatures."""

from .base import KmerSignature
from .calc import calc_signature, calc_signatures, kmer_array
