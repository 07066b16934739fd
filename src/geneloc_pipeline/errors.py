"""Exception types raised by the gene plot pipeline."""


class GenePlotError(Exception):
    """Base class for pipeline errors that abort a run."""


class UnsupportedSpeciesError(GenePlotError, ValueError):
    """Species key has no profile in the species table."""

    def __init__(self, species, supported: list[str]):
        self.species = species
        self.supported = supported
        super().__init__(
            f"Unsupported species: {species!r}. "
            f"Choose one of: {', '.join(supported)}"
        )


class EmptyGeneListError(GenePlotError, ValueError):
    """No gene symbols were supplied."""

    def __init__(self):
        super().__init__("At least one gene symbol is required")


class NoLocationsFoundError(GenePlotError):
    """Annotation service returned no rows for the requested genes."""

    def __init__(self, symbols: list[str], dataset_id: str):
        self.symbols = symbols
        self.dataset_id = dataset_id
        super().__init__(
            f"No location data found for {len(symbols)} gene(s) in {dataset_id}: "
            f"{', '.join(symbols)}"
        )


class AnnotationServiceError(GenePlotError):
    """Annotation service answered with an error payload instead of rows."""
