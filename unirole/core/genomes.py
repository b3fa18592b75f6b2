"""
Genome and feature containers, plus directory iteration over genome files.

Genomes are read either from GTO (genome typed object) JSON files or from
GenBank files through Biopython.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from Bio import SeqIO
from loguru import logger

from .role_map import Role, RoleMap

DEFAULT_GTO_SUFFIXES = [".gto"]
DEFAULT_GENBANK_SUFFIXES = [".gb", ".gbk", ".gbff"]


class Feature:
    """A genomic feature with a functional assignment."""

    def __init__(self, feature_id: str, function: Optional[str] = None):
        self.id = feature_id
        self.function = function or ""

    def useful_roles(self, role_map: RoleMap) -> List[Role]:
        """Return the roles of interest this feature implements."""
        return role_map.resolve(self.function)

    def __repr__(self) -> str:
        return f"Feature({self.id!r}, {self.function!r})"


class Genome:
    """
    A genome reduced to the features needed for role counting.
    """

    def __init__(self, genome_id: str, name: str = "", features: Optional[Iterable[Feature]] = None):
        self.id = genome_id
        self.name = name
        self.features: List[Feature] = list(features or [])

    def add_feature(self, feature: Feature) -> None:
        self.features.append(feature)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __str__(self) -> str:
        return f"{self.id} ({self.name})" if self.name else self.id

    @classmethod
    def from_gto(cls, gto_file: Union[str, Path]) -> "Genome":
        """
        Load a genome from a GTO JSON file.

        Args:
            gto_file: Path to the GTO file

        Returns:
            Genome holding the file's features
        """
        gto_file = Path(gto_file)
        with open(gto_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        genome = cls(data.get("id", gto_file.stem), data.get("scientific_name", ""))
        for feat in data.get("features", []):
            genome.add_feature(Feature(feat.get("id", ""), feat.get("function")))
        logger.debug(f"Loaded {len(genome)} features from {gto_file}")
        return genome

    @classmethod
    def from_genbank(cls, genbank_file: Union[str, Path]) -> "Genome":
        """
        Load a genome from a GenBank file.

        CDS features contribute their product qualifier as the functional
        assignment. All records in the file are treated as one genome.

        Args:
            genbank_file: Path to the GenBank file

        Returns:
            Genome holding the CDS features of every record
        """
        genbank_file = Path(genbank_file)
        genome = cls(genbank_file.stem)
        for record in SeqIO.parse(str(genbank_file), "genbank"):
            if not genome.name:
                genome.name = record.annotations.get("organism", "") or record.description
            for seq_feature in record.features:
                if seq_feature.type != "CDS":
                    continue
                qualifiers = seq_feature.qualifiers
                feature_id = (qualifiers.get("locus_tag") or qualifiers.get("protein_id") or [""])[0]
                function = " / ".join(qualifiers.get("product", []))
                genome.add_feature(Feature(feature_id, function))
        logger.debug(f"Loaded {len(genome)} CDS features from {genbank_file}")
        return genome


class GenomeDirectory:
    """
    Iterates over the genome files in a directory, in file-name order.
    """

    def __init__(self, genome_dir: Union[str, Path], config: Optional[Dict] = None):
        """
        Initialize the genome directory.

        Args:
            genome_dir: Directory containing genome files
            config: Configuration dictionary (gto_suffixes, genbank_suffixes)
        """
        self.genome_dir = Path(genome_dir)
        self.config = config or {}
        if not self.genome_dir.is_dir():
            raise NotADirectoryError(f"{self.genome_dir} is not a valid directory.")

        self.gto_suffixes = {s.lower() for s in self.config.get("gto_suffixes", DEFAULT_GTO_SUFFIXES)}
        self.genbank_suffixes = {s.lower() for s in self.config.get("genbank_suffixes", DEFAULT_GENBANK_SUFFIXES)}
        self.genome_files = sorted(
            path for path in self.genome_dir.iterdir()
            if path.is_file() and path.suffix.lower() in (self.gto_suffixes | self.genbank_suffixes)
        )
        logger.info(f"{len(self.genome_files)} genome files found in {self.genome_dir}")

    def __len__(self) -> int:
        return len(self.genome_files)

    def __iter__(self) -> Iterator[Genome]:
        for genome_file in self.genome_files:
            if genome_file.suffix.lower() in self.gto_suffixes:
                yield Genome.from_gto(genome_file)
            else:
                yield Genome.from_genbank(genome_file)
