# imgtoy

imgtoy reads a description of an image effect pipeline and resolves it into
concrete, randomised effect settings. Every numeric option can be a fixed
value, a list to choose from, or a `{min, max}` range, so each resolution of
the same description gives a different variation: brightness, saturation and
contrast factors, hue rotation, multiplication and quantisation, palettes
generated in LCh space and converted to sRGB, error-diffusion dithering
settings, and a large family of ordered-dither patterns with rotation,
mirroring, checkering, blurring, exponentiation and inversion modifiers.

Still images are loaded with Pillow and can be shrunk to a size limit. GIFs
and video clips can be split into frames and stitched back together with the
`ffmpeg` and `ffprobe` executables, which must be on your `PATH` for that.

## Installation

Install the package with your usual Python package tool; it depends on
Pillow and Requests.

## Configuration

A configuration is plain data: nested dicts, lists, strings and numbers. It
is usually written as YAML and loaded with a YAML parser of your choice
(PyYAML, for instance, which is not installed with this package). It has
three sections: where the media comes from, where results go, and which
effects to apply.

```yaml
source:
  file: input/picture.png
  max-dim: 800          # or max-pixels: 500000

output:
  path: output
  n: 10                 # number of variations

effects:
  - brighten:
      factor: { min: -0.1, max: 0.1 }
  - hue-rotate:
      factor: [0.0, 90.0, 180.0]
  - ordered:
      strategies:
        - bayer:
            matrix-size: [2, 4, 8]
        - zigzag:
            matrix-size: 8
            halt-threshold: 20
            wrapping: [horizontal, all]
      rotation:
        chance: 0.5
        values: [left, right, half]
      palette:
        config:
          lum-strategy:
            type: distributed
            count: 4
          chroma-strategy:
            type: random
          hue-strategies:
            - type: neighbour
              size: 30.0
              count: 3
              distribution: linear
          misc-flags: [extremes]
```

A source is given as `file:` or `url:`, never both. For URLs, `&width=…` and
`&height=…` query parameters are removed. The effect kinds are `brighten`,
`saturate`, `contrast`, `hue-rotate`, `multiply-hue`, `quantize-hue`,
`gradient-map`, `error-propagator` and `ordered`; each effect entry is named
by the first key of its mapping.

The modifiers' `chance` values are checked with `imgtoy.value.Chance`: a
roll succeeds when the generated value is below a uniform draw in `[0, 1]`.

## Using it from Python

```python
import random

from imgtoy.structure import MainConfiguration

config = MainConfiguration.from_value({
    "source": {"file": "input/picture.png", "max-dim": 800},
    "output": {"path": "output", "n": 3},
    "effects": [
        {"brighten": {"factor": {"min": -0.1, "max": 0.1}}},
        {"hue-rotate": {"factor": [0.0, 90.0, 180.0]}},
    ],
})

print(config.source.constraint_str())      # max-dim: 800
print(config.output.path, config.output.n)

rng = random.Random(1234)
for _ in range(config.output.n):
    for effect in config.effects.generate(rng):
        print(effect)
```

`Effects.generate` returns, in order, a `Filter` (a name and its resolved
value) for the simple effects, an `ErrorPropagatorDither` for
`error-propagator`, and an `OrderedDither` for `ordered`. Each call rolls
every random option again; passing a seeded `random.Random` makes a run
reproducible.

`Source.perform()` loads the source media. A still image comes back as a
Pillow image, shrunk to the size constraint if one is set; a GIF comes back
as a list of RGBA frames.

The building blocks can also be used on their own. A palette, for example:

```python
import random

from imgtoy.palette import Palette

palette = Palette.from_value({
    "palette": {
        "config": {
            "lum-strategy": {"type": "distributed", "count": 3},
            "chroma-strategy": {"type": "random"},
            "hue-strategies": [{"type": "cycle", "count": 2}],
            "misc-flags": [],
        }
    }
})
colours = palette.generate(random.Random(0))   # list of (r, g, b) in 0..1, unclamped
```

Individual value options are handled by `imgtoy.value`:
`parse_property_as_f64`, `parse_property_as_usize` and
`parse_property_as_isize` read a property into a `ValueProperty`, whose
`generate` method draws one concrete value. Malformed configuration raises
`imgtoy.value.ConfigError`.

## Media helpers

`imgtoy.media` identifies what kind of media a path, URL, file extension,
MIME type or set of response headers refers to (`ImageKind`) and loads it
(`parse_localfile`, `parse_webfile`, `parse_bytes`). `imgtoy.ffmpeg` splits
animations into numbered PNG frames under `temp/<prefix>/`
(`split_media`), combines frames back into a file (`combine_media`), and
removes the working directory (`clear_temp`).

## Logging

`imgtoy.systemlog.SystemLog` writes a human-readable `log.log` together with
a detailed `app.log` into an existing directory, with nested categories and
aligned property lines; it can be used as a context manager. `imgtoy.applog`
offers `AppLog`, `RunLog` and `LogEntry` for building a textual summary of
runs and the effects applied in them.

## What it does not do

- There is no command-line program. Reading a configuration file, running
  the iterations and writing results is left to your own code.
- Effects are resolved into settings only. The package does not apply
  brightening, hue changes, gradient maps or dithering to pixels, so it
  produces no processed images by itself; the resolved settings are meant to
  be handed to an image-processing routine of your choice.
- Animated sources are split into and rebuilt from frames, but no effect is
  run on those frames by the package.