"""Benchmark shortcode expansion on typical documents.

Measures:
- Fast path: documents without any opening bracket
- Narrowing: large registries where only a few names appear in the text
- Pattern cache: cold compile vs cached lookup
- Hook overhead: expansion with and without dispatch hooks

Run:
    python -m benchmarks.benchmark_expand

"""

import gc
import statistics
import sys
import timeit

from corchetes import ShortcodeConfig, ShortcodeRegistry, build_pattern, expand
from corchetes.config import shortcode_config_context


def _echo(attrs, content, tag):
    return content or tag


def _document(paragraphs: int = 200) -> str:
    parts = []
    for i in range(paragraphs):
        parts.append(
            f'Paragraph {i} with [b]bold[/b], a [link href="/p/{i}" title=\'Page {i}\'/] '
            f"and [[escaped]] text. [gallery ids=1,2,3]\n"
        )
    return "".join(parts)


def _registry(extra_names: int = 0) -> ShortcodeRegistry:
    registry = ShortcodeRegistry({"b": _echo, "link": _echo, "gallery": _echo})
    for i in range(extra_names):
        registry.register(f"unused{i}", _echo)
    return registry


def _trials(func, number: int, repeat: int = 5) -> tuple[float, float]:
    gc.disable()
    times = [timeit.timeit(func, number=number) for _ in range(repeat)]
    gc.enable()
    return statistics.mean(times), statistics.stdev(times)


def benchmark_fast_path(n: int = 200_000) -> dict[str, float]:
    """Benchmark documents with no shortcodes."""
    print(f"\n{'='*60}")
    print(f"Fast Path Benchmark (n={n:,})")
    print("=" * 60)

    registry = _registry()
    text = "Plain paragraph without any tags. " * 20

    avg, std = _trials(lambda: expand(text, registry), number=n)
    print(f"\nNo brackets: {avg*1000:.2f}ms (±{std*1000:.2f}ms)")
    print(f"Per call:    {avg/n*1e9:.1f}ns")

    return {"fast_path_ms": avg * 1000}


def benchmark_registry_size(n: int = 200) -> dict[str, float]:
    """Benchmark expansion as unused registrations grow."""
    print(f"\n{'='*60}")
    print(f"Registry Size Benchmark (n={n:,})")
    print("=" * 60)

    text = _document()
    results = {}
    for extra in (0, 100, 1000):
        registry = _registry(extra)
        avg, _std = _trials(lambda registry=registry: expand(text, registry), number=n)
        results[f"extra_{extra}_ms"] = avg * 1000
        print(f"\n{extra:>5} unused names: {avg*1000:.2f}ms ({avg/n*1e6:.1f}us/document)")

    return results


def benchmark_pattern_cache(n: int = 2_000) -> dict[str, float]:
    """Benchmark compiling patterns cold vs hitting the cache."""
    print(f"\n{'='*60}")
    print(f"Pattern Cache Benchmark (n={n:,})")
    print("=" * 60)

    names = frozenset(f"tag{i}" for i in range(50))

    def cold() -> None:
        build_pattern.cache_clear()
        build_pattern(names)

    cold_avg, _ = _trials(cold, number=n)
    build_pattern(names)
    warm_avg, _ = _trials(lambda: build_pattern(names), number=n)

    print(f"\nCold compile: {cold_avg*1000:.2f}ms ({cold_avg/n*1e6:.1f}us/pattern)")
    print(f"Cached:       {warm_avg*1000:.2f}ms ({warm_avg/n*1e9:.1f}ns/lookup)")
    print(f"Speedup: {cold_avg/warm_avg:.0f}x")

    return {"cold_ms": cold_avg * 1000, "warm_ms": warm_avg * 1000}


def benchmark_hooks(n: int = 200) -> dict[str, float]:
    """Benchmark dispatch hook overhead."""
    print(f"\n{'='*60}")
    print(f"Hook Overhead Benchmark (n={n:,})")
    print("=" * 60)

    registry = _registry()
    text = _document()
    config = ShortcodeConfig(
        pre_dispatch=lambda tag, attrs, match: None,
        post_dispatch=lambda output, tag, attrs, match: output,
    )

    plain, _ = _trials(lambda: expand(text, registry), number=n)
    with shortcode_config_context(config):
        hooked, _ = _trials(lambda: expand(text, registry), number=n)

    print(f"\nNo hooks:   {plain*1000:.2f}ms")
    print(f"With hooks: {hooked*1000:.2f}ms")
    print(f"Overhead: {hooked/plain:.2f}x")

    return {"plain_ms": plain * 1000, "hooked_ms": hooked * 1000, "overhead": hooked / plain}


def main() -> None:
    """Run all benchmarks."""
    print("\n" + "=" * 60)
    print("Corchetes Expansion Benchmark Suite")
    print("=" * 60)
    print(f"Python {sys.version}")

    results = {}
    results["fast_path"] = benchmark_fast_path()
    results["registry_size"] = benchmark_registry_size()
    results["pattern_cache"] = benchmark_pattern_cache()
    results["hooks"] = benchmark_hooks()

    print(f"\n{'='*60}")
    print("Summary")
    print("=" * 60)
    size = results["registry_size"]
    print(f"\n1000 unused names cost: {size['extra_1000_ms']/size['extra_0_ms']:.2f}x")
    print(f"Hook overhead:          {results['hooks']['overhead']:.2f}x")


if __name__ == "__main__":
    main()
