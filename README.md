# taskpipeline

Building blocks for automation pipelines:

- **Typed variables** (`taskpipeline.values`). A variable is named `%` followed by a type letter: `%i…` integer, `%s…` string, `%f…` float, `%b…` boolean, `%p…` point, `%r…` rectangle. Any other letter means integer.
- **A variable manager** (`taskpipeline.manager`). It evaluates conditions, applies operations such as `%icount++` and `%itotal=%icount*2`, and expands log strings.
- **Recognitions** (`taskpipeline.basic`, `taskpipeline.color`, `taskpipeline.template`, `taskpipeline.ocr`). These are direct hit, colour search, multi-colour search, lists of colours or colour patterns, template match and OCR. Each is configured from a JSON-like dict and runs against a vision backend that you supply.

## Installation

```
pip install taskpipeline
```

To include the test dependencies:

```
pip install "taskpipeline[test]"
```

## Variables and conditions

```python
from taskpipeline.manager import VariableManager

vm = VariableManager()
vm.parse_definitions(["%icount=3", "%sname=hero", "%bready=true"])

vm.evaluate_condition("%icount>=3")   # True
vm.execute_expression("%icount++")
vm.get("%icount").value               # 4

vm.process_log_string("{%icount++}count is [%icount]")
# runs the operation in braces, drops it, substitutes the reference: "count is 5"
```

### Defining variables

- `define(name, var_type, value=None)` creates or replaces a variable.
- `parse_definition("%name=value")` does the same, taking the type from the name.
- `parse_definitions` applies every definition in a list. If any of them failed, it then raises one `VariableError` that lists the failures.
- A bad name or an unparsable value raises `VariableError`.

### Reading and writing values

- `get(name)` returns a copy of the `Variable`, or `None` when the name is not defined.
- `set(name, value)` stores a value only when the variable exists and the value is of exactly the variable's Python type. Otherwise it raises `VariableError`.

### Conditions

`evaluate_condition` looks for the operators `<=`, `>=`, `==`, `!=`, `<` and `>`, in that order, and compares the two sides:

- Each side is a variable or a literal. A literal is read as an integer, then as a float, then as a string.
- Integers compare with integers. A float on either side makes the comparison numeric.
- Strings compare with strings.
- Booleans support only `==` and `!=`.
- Any other mix of types is false, and so is an unknown variable.

Without an operator, the condition is the truth of a variable or of a boolean expression.

### Operations

`execute_expression` applies one operation. Whitespace in it is ignored.

- `%name++` and `%name--` work on integer variables only.
- `%name=expr` assigns to a variable. `expr` is another variable (converted to the target's type), an arithmetic expression with `+ - * /` over numbers and variables, or a constant.
- Failures raise `VariableError` or its subclass `ExpressionError`. Division by zero is one such failure.

### Points and rectangles

`Point.from_string("x,y")` and `Rect.from_string("x1,y1,x2,y2")` parse points and rectangles. When the text holds no such numbers, they return the zero value. `type_from_name` gives the type a variable name implies.

## Recognitions

A recognition does not capture the screen. It hands parameter objects (`FindColorParams`, `FindMultiColorParams`, `TemplateMatchParams`, `OcrParams`) to a `VisionBackend`. `VisionBackend` is a protocol in `taskpipeline.base` with the methods `find_color`, `find_multi_color`, `template_match`, `ocr` and `ocr_batch`, and each returns `VisionMatch` results. Calling `recognize()` without a backend raises `RuntimeError`. The exceptions are `DirectHitRecognition` and `AlwaysRecognition`, which need no backend.

```python
from taskpipeline.factory import create_recognition
from taskpipeline.results import RecognitionType

recognition = create_recognition(
    RecognitionType.FIND_COLOR,
    {"roi": [0, 0, 100, 100], "color": "FF0000", "similarity": 0.9},
    backend,
)
result = recognition.recognize()
if result:
    print(result.box, result.score)
```

### Results and regions

- A `RecognitionResult` is true when it succeeded. It carries a `Box` (`x`, `y`, `width`, `height`), a `score` and, for OCR, `text`.
- Without a `roi` of four values, the search region is the full 1920×1080 screen. A four-value `roi_offset` is added to the corners. `resolve_roi` shows the region that results.
- Setting `inverse = True` on a recognition flips the success of its results.

### Configuration keys

| Recognition | Keys |
|---|---|
| colour searches | `roi`, `roi_offset`, `similarity` (default 1.0), `direction` (default 0) |
| `FindColorRecognition` | also `color` |
| `FindMultiColorRecognition` | also `first_color`, `offset_color` |
| `FindColorListRecognition` | also `color_list` (a string or a list) |
| `FindMultiColorListRecognition` | also `multi_color_list`, a list of `[first, offset]` pairs |
| `TemplateMatchRecognition` | `template` (a string or a list), `threshold` (a number or a list, default 0.8), `method` (default 5) |
| `OCRRecognition` | `expected`, `replace` (pairs), `orderBy`, `index`, `onlyRec`, `model` |

- The list searches return the first colour or pattern that is found.
- A template recognition with no templates fails without calling the backend.
- For OCR, `recognize()` picks the text at `index` from `ocr_batch`; a negative index counts from the end. If `ocr_batch` raises, `recognize()` falls back to `ocr`. `recognize_batch()` returns every result.

### Type names

- `create_recognition` builds the class for a `RecognitionType`. It gives a `DirectHitRecognition` for `ALWAYS` and any other type it does not list.
- `recognition_type_from_string` maps names such as `"FindColor"` or `"OCR"` to types. Unknown names map to `DIRECT_HIT`.
- `recognition_type_to_string` does the reverse and returns `"Unknown"` for `ALWAYS`.

## What this package does not do

- It has no pipeline or node graph that loads a task file and runs its nodes.
- `ActionType` only names action kinds. Nothing here clicks, swipes, types or starts applications.
- It does no screen capture or image processing of its own. All searching is left to the `VisionBackend` you provide.
- It has no command-line interface.