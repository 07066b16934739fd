from geneloc_pipeline.persistence.provenance import ProvenanceTracker

__all__ = ["ProvenanceTracker"]
