"""Select representative genomes by protein k-mer similarity and classify new genomes against them."""

__version__ = '0.3.0'
