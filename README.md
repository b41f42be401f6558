# splatkit

Building blocks for Gaussian splat tooling, written on top of NumPy and the
standard library.

## What is inside

- `splatkit.adam` – an Adam optimizer. `AdamScaledConfig` (defaults
  `beta_1=0.9`, `beta_2=0.999`, `epsilon=1e-5`, optional `weight_decay`, and
  gradient clipping by `clip_value` or `clip_norm`, not both) creates an
  `AdamScaled` via `init()`. `AdamScaled.step(lr, tensor, grad, state)` returns
  the updated tensor and a new `AdamState`. An `AdamState` may carry a
  `scaling` array that multiplies the learning rate element-wise.
  `AdaptiveMomentum.transform` is the bias-corrected moment update, and
  `MomentumState` holds the moments and step count.
- `splatkit.multinomial` – `multinomial_sample(weights, n, rng=None)` draws `n`
  distinct indices with probability proportional to their weights. NaN weights
  count as zero. It raises `ValueError` for negative weights, or when fewer
  than `n` indices have non-zero weight.
- `splatkit.vfs` – `BrushVfs`, a read-only, case-insensitive view over files:
  - `BrushVfs.from_path` takes a directory (every file below it), a zip
    archive, or a `.ply` file.
  - `BrushVfs.from_reader` takes a binary stream that starts with `ply` or
    `PK`.
  - Lookups: `files_with_extension`, `files_with_stem`, `files_ending_in`,
    `file_paths`, `file_count`.
  - `reader_at_path` opens a file. A streamed ply can be opened only once.
  - Files without an extension and `__MACOSX` entries are ignored.
  - Errors are raised as `VfsConstructError`, `InvalidHtmlError` (an HTML
    page arrived instead of data) or `UnknownDataTypeError`.
  - `path_key` gives the lookup key of a path.
- `splatkit.data_source` – `DataSource`, with a `SourceKind` of `PICK_FILE`,
  `PICK_DIRECTORY`, `URL` or `PATH`:
  - `DataSource.parse` treats `http://` and `https://` text as a URL and
    anything else as a path.
  - `into_vfs()` opens the source as a `BrushVfs`. Picking uses a tkinter
    dialog. URLs are fetched with `urllib`; `normalize_url` adds `https://`
    when no scheme is given.
  - Failures raise `DataSourceError`.
- `splatkit.codewriter` – `CodeWriter` collects lines of generated code.
  - Each `}` in a line dedents that line.
  - Each `{` indents the lines that follow, by four spaces.
  - `string()` returns the text.
- `splatkit.wgsl_names` – helpers for composed shader names:
  - `make_valid_rust_import` turns an import path into a module name.
  - `decode` decodes unpadded base32.
  - `demangle_str` and `mod_name_from_mangled` handle composed names.
  - `rust_type_name` and `alignment_of` map WGSL type names to plain-data
    types and byte alignments. Both raise `ValueError` for unsupported types.
- `splatkit.formatting` – `bytes_format` shows a byte count with decimal unit
  prefixes (`"999 B"`, `"1.50 MB"`).

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

One optimizer step:

```python
import numpy as np
from splatkit.adam import AdamScaledConfig

optim = AdamScaledConfig(epsilon=1e-15).init()
params = np.zeros(3)
params, state = optim.step(0.01, params, np.array([1.0, -2.0, 0.5]))
params, state = optim.step(0.01, params, np.array([0.5, -1.0, 0.1]), state)
```

Sample indices by weight:

```python
import numpy as np
from splatkit.multinomial import multinomial_sample

print(multinomial_sample([0.1, float("nan"), 2.0, 0.5], 2, np.random.default_rng(0)))
```

Open a dataset folder or archive and look for files:

```python
from splatkit.data_source import DataSource

vfs = DataSource.parse("scenes/garden.zip").into_vfs()
for path in vfs.files_with_extension("ply"):
    with vfs.reader_at_path(path) as reader:
        print(path, len(reader.read()))
```

Work with shader names and write code:

```python
from splatkit.codewriter import CodeWriter
from splatkit.wgsl_names import alignment_of, make_valid_rust_import

print(make_valid_rust_import('"../helpers.wgsl"'))  # "helpers"
print(alignment_of("vec3<f32>"))                   # 16

code = CodeWriter()
code.add_lines(["pub mod helpers {", "pub const N: u32 = 4;", "}"])
print(code.string())
```

Format a byte count:

```python
from splatkit.formatting import bytes_format

print(bytes_format(1_500_000))  # "1.50 MB"
```

## What it does not do

splatkit has no renderer, training loop, image-quality metric, quaternion
maths, camera controls or training-configuration options. It offers no viewer
window and no command-line program. It also does not compile shaders: the
`wgsl_names` helpers only work on names and type strings that you pass in.