"""Generator – drive the pipeline per declared entity.

Each unit (one declaration) is scanned, built, compiled and emitted
independently. A unit either yields a complete :class:`GeneratedArtifacts`
or nothing; ``generate_all`` records a :class:`Diagnostic` for a failed
unit and carries on with the rest unless ``fail_fast`` is set.
"""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Iterable

from facet_search.compilers.aggregations import AggregationCompiler, AggregationFunction
from facet_search.compilers.metadata import MetadataCompiler, SearchMetadata
from facet_search.compilers.predicates import PredicateCompiler, QueryTransform
from facet_search.config import GeneratorSettings
from facet_search.declarations.scanner import DeclarationScanner, TypeDeclaration
from facet_search.emit.renderer import EmittedSource, SourceEmitter
from facet_search.errors import EmissionError, FacetSearchError, GenerationError
from facet_search.fulltext.capabilities import ProviderCapabilities
from facet_search.fulltext.dispatcher import FullTextStrategyDispatcher
from facet_search.model.builder import SpecBuilder
from facet_search.model.spec import EntitySearchSpec
from facet_search.observability import get_logger
from facet_search.schema.filters import FilterSchema, compile_filter_schema

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class GeneratedArtifacts:
    """Everything derived from one :class:`EntitySearchSpec`."""

    spec: EntitySearchSpec
    filter_schema: FilterSchema
    transform: QueryTransform
    aggregations: AggregationFunction | None = None
    metadata: SearchMetadata | None = None
    sources: tuple[EmittedSource, ...] = ()

    def source(self, artifact: str) -> EmittedSource | None:
        return next((s for s in self.sources if s.artifact == artifact), None)

    def write(self, output_dir: str | Path) -> list[Path]:
        """Write the emitted modules below *output_dir*, one directory per namespace segment."""
        root = Path(output_dir)
        written: list[Path] = []
        for source in self.sources:
            target = root.joinpath(*source.path.parts)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(source.text, encoding="utf-8")
            except OSError as exc:
                raise EmissionError(self.spec.entity_name, source.module, cause=exc) from exc
            written.append(target)
        logger.info("artifacts_written", entity=self.spec.entity_name, files=len(written), root=str(root))
        return written


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    entity: str
    code: str
    message: str
    severity: str = "warning"


@dataclasses.dataclass
class GenerationReport:
    artifacts: dict[str, GeneratedArtifacts] = dataclasses.field(default_factory=dict)
    diagnostics: list[Diagnostic] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def __getitem__(self, entity: str) -> GeneratedArtifacts:
        return self.artifacts[entity]

    def write(self, output_dir: str | Path) -> list[Path]:
        return [path for artifacts in self.artifacts.values() for path in artifacts.write(output_dir)]


def _unit_name(declaration: Any) -> str:
    if isinstance(declaration, TypeDeclaration):
        return declaration.name
    return getattr(declaration, "__name__", repr(declaration))


class SearchGenerator:
    """Run DeclarationScanner → SpecBuilder → compilers → SourceEmitter.

    Artifacts are cached per spec: regenerating an unchanged spec returns
    the cached result without re-emitting.
    """

    def __init__(
        self,
        settings: GeneratorSettings | None = None,
        *,
        capabilities: ProviderCapabilities | None = None,
        dispatcher: FullTextStrategyDispatcher | None = None,
        emitter: SourceEmitter | None = None,
    ) -> None:
        self._settings = settings or GeneratorSettings()
        self._scanner = DeclarationScanner()
        self._builder = SpecBuilder(validate_dependencies=self._settings.validate_dependencies)
        self._predicates = PredicateCompiler(dispatcher or FullTextStrategyDispatcher(capabilities))
        self._aggregations = AggregationCompiler()
        self._metadata = MetadataCompiler()
        self._emitter = emitter or SourceEmitter()
        self._cache: dict[EntitySearchSpec, GeneratedArtifacts] = {}

    @property
    def settings(self) -> GeneratorSettings:
        return self._settings

    def build_spec(self, declaration: TypeDeclaration | type) -> EntitySearchSpec:
        return self._builder.build(self._scanner.scan(declaration))

    def generate(self, declaration: TypeDeclaration | type) -> GeneratedArtifacts:
        """Generate one unit; raises on any failure."""
        return self.compile(self.build_spec(declaration))

    def compile(self, spec: EntitySearchSpec) -> GeneratedArtifacts:
        cached = self._cache.get(spec)
        if cached is not None:
            logger.debug("artifacts_cache_hit", entity=spec.entity_name)
            return cached

        log = logger.bind(entity=spec.entity_name)
        schema = compile_filter_schema(spec)
        transform = self._predicates.compile(spec, schema)
        aggregations = self._aggregations.compile(spec) if spec.generate_aggregations else None
        metadata = self._metadata.compile(spec) if spec.generate_metadata else None
        sources: tuple[EmittedSource, ...] = ()
        if self._settings.emit_sources:
            sources = self._emitter.emit(
                spec,
                schema=schema,
                transform=transform,
                aggregations=aggregations,
                metadata=metadata,
            )
        artifacts = GeneratedArtifacts(
            spec=spec,
            filter_schema=schema,
            transform=transform,
            aggregations=aggregations,
            metadata=metadata,
            sources=sources,
        )
        self._cache[spec] = artifacts
        log.info(
            "artifacts_generated",
            facets=len(spec.facets),
            full_text_fields=len(spec.full_text_fields),
            modules=len(sources),
        )
        return artifacts

    def generate_all(self, declarations: Iterable[TypeDeclaration | type]) -> GenerationReport:
        """Generate every unit independently; failures become diagnostics."""
        report = GenerationReport()
        for declaration in declarations:
            name = _unit_name(declaration)
            try:
                artifacts = self.generate(declaration)
            except Exception as exc:
                error = exc if isinstance(exc, FacetSearchError) else GenerationError(name, cause=exc)
                if self._settings.fail_fast:
                    if error is exc:
                        raise
                    raise error from exc
                report.diagnostics.append(Diagnostic(entity=name, code=error.code, message=error.message))
                logger.warning("entity_skipped", **{**error.to_dict(), "entity": name}, exc_info=True)
                continue
            report.artifacts[artifacts.spec.entity_name] = artifacts
        logger.info(
            "generation_finished",
            generated=len(report.artifacts),
            skipped=len(report.diagnostics),
        )
        return report


def generate(declaration: TypeDeclaration | type, **settings: Any) -> GeneratedArtifacts:
    """Convenience wrapper: generate one unit with default components."""
    return SearchGenerator(GeneratorSettings(**settings)).generate(declaration)


__all__ = [
    "Diagnostic",
    "GeneratedArtifacts",
    "GenerationReport",
    "SearchGenerator",
    "generate",
]
