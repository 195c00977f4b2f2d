# coursebook

Tools for books organised as a hierarchy of courses, sessions, segments and
slides. Each chapter's Markdown may start with YAML frontmatter:

```yaml
---
course: Fundamentals
session: Day 1 Morning
minutes: 10
target_minutes: 180
---
```

A top-level chapter that sets `course` starts that course (and resets the
session); `course: none` marks material outside any course. A chapter inside
a course must have a `session` in effect, set by its own frontmatter or by an
earlier chapter, otherwise extraction fails with `CourseStructureError`.
Every top-level chapter within a course is a segment: the chapter itself is
the segment's first slide, and each of its sub-chapters is a further slide
that also takes in all of its own nested sub-chapters. Nested sub-chapters
may not set `course` or `session`.

`minutes` is the time a slide takes to teach. A session's length is the sum
of its segments plus a 10-minute break between each pair of segments that
take any time. `target_minutes` values given on a session's chapters are
added up as that session's target; without one, the target is the actual
length. Durations are shown in words, with anything over 5 minutes rounded
up to a multiple of 5 (`duration(61)` is `"1 hour and 5 minutes"`).

## Installation

```
pip install .
```

## Commands

### `mdbook-course`

An mdBook preprocessor. It reads the `[context, book]` JSON pair from
standard input, strips the frontmatter from every chapter, and writes the
book back as compact JSON on standard output. For each chapter that belongs
to a slide with a non-zero duration and contains `<details>`, a note such as
"This slide should take about 10 minutes." is added at the start of every
`<details>` block (only on the slide's first chapter). Directives are then
expanded in every chapter that has a source file:

- `{{%session outline}}`: a table of the current session's segments
- `{{%segment outline}}`: a table of the current segment's slides
- `{{%course outline}}`: the schedule of the current course
- `{{%course outline NAME}}`: the schedule of the course called NAME, or
  `not found - ...` if there is none

Any other directive is replaced by its own text. Segments and slides that
take no time are left out of the tables.

`mdbook-course supports <renderer>` exits with status 0 for every renderer.
On malformed input or frontmatter the error is printed to standard error and
the exit status is 1.

### `course-schedule`

Run from the book's root directory. With no argument, or with `sessions`,
prints each session of each course with its length against its target
(flagging more than 15 minutes too long or short) and its segments.
`course-schedule pr` prints a per-course summary suited to a pull request,
with sessions compared against their targets within 5 minutes. Both stop at
the first course whose target is zero. `course-schedule segments` is
accepted but only reports that the summary is not available, exiting with
status 1.

### `course-content`

Run from the book's root directory. Prints the Markdown of every slide in
course order under `# COURSE:`, `# SESSION:`, `# SEGMENT:` and `# SLIDE:`
headings. Slide files are read from `src/` under the current directory.

### `mdbook-exerciser`

An mdBook renderer. It reads the render context JSON from standard input,
takes the directory named by `output.exerciser.output-directory`, removes
it if it exists and creates it again (its parent must exist). In each
chapter, an HTML comment line such as `<!-- File src/main.rs -->` followed
by a code block writes the block's contents to that file, inside a
subdirectory named after the chapter's file stem. Code blocks without such
a comment, and comments with no following code block, are ignored.

## Loading a book

The `course-schedule` and `course-content` commands load the book with
`coursebook.book.load_book(root)`. It reads `SUMMARY.md` from the source
directory (`src`, or the `src` value in the `[book]` table of `book.toml`)
and understands a simple summary: list items holding `[Name](file.md)`
links, nested by indentation; unlisted links as prefix or suffix chapters;
`---` separators; and headings after the first as part titles. Draft
chapters (empty link targets) get no content. No other `book.toml` settings
are read.

## Library use

```python
from coursebook.book import load_book
from coursebook.course import Courses
from coursebook.markdown import Table, duration

courses, book = Courses.extract_structure(load_book("."))
for course in courses:
    print(course.name, duration(course.minutes()))
    print(course.schedule())

table = Table(["Segment", "Duration"])
table.add_row(["Welcome", duration(5)])
print(table)
```

`Courses.extract_structure(book)` returns the hierarchy together with the
book, whose chapters have had their frontmatter removed. `Courses`,
`Course`, `Session` and `Segment` iterate over their children;
`Courses.find_course(name)` and `Courses.find_slide(chapter)` look items up.
`coursebook.frontmatter.split_frontmatter(chapter)` parses a single
chapter's frontmatter, raising `FrontmatterError` on invalid YAML or values,
and `coursebook.exerciser.process(directory, markdown)` extracts exercise
files from one Markdown text.

## What it does not do

The package does not build or render books itself: `mdbook-course` and
`mdbook-exerciser` only act on the JSON that an mdBook build passes to them,
and the book loader covers only the summary format described above.