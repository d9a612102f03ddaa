"""
Integration: generate builders, compile them with javac, and run them.

Checks the runtime behaviour of the emitted Java that text assertions
cannot: chained setters, reflective population in build(), default
values when nothing was set, and silently skipped unknown fields.
"""

import textwrap
from pathlib import Path

from buildergen.core.models import ClassDescriptor, FieldSpec
from buildergen.core.services.generation import run_generation_pass
from buildergen.core.services.sink import FileSystemSink

PERSON_JAVA = textwrap.dedent("""\
    package a.b;

    public class Person {
        private String firstName;
        private int age;
        private java.util.List<String> tags;

        public Person() {
        }

        public String getFirstName() { return firstName; }
        public int getAge() { return age; }
        public java.util.List<String> getTags() { return tags; }
    }
""")

MAIN_JAVA = textwrap.dedent("""\
    import a.b.Person;
    import a.b.PersonBuilder;

    public class Main {
        public static void main(String[] args) {
            Person full = new PersonBuilder()
                .withFirstName("Ada")
                .withAge(36)
                .withTags(java.util.List.of("math"))
                .build();
            System.out.println(full.getFirstName() + "|" + full.getAge() + "|" + full.getTags());

            Person empty = new PersonBuilder().build();
            System.out.println(empty.getFirstName() + "|" + empty.getAge() + "|" + empty.getTags());

            PersonBuilder builder = new PersonBuilder();
            System.out.println(builder.withAge(1) == builder);
        }
    }
""")


def _person_descriptor(*before_age: FieldSpec) -> ClassDescriptor:
    return ClassDescriptor(
        qualified_name="a.b.Person",
        fields=[
            FieldSpec(name="firstName", type="String"),
            *before_age,
            FieldSpec(name="age", type="int"),
            FieldSpec(name="tags", type="java.util.List<String>"),
        ],
    )


def _write_sources(tmp_path: Path) -> tuple[Path, Path]:
    src = tmp_path / "src"
    (src / "a" / "b").mkdir(parents=True)
    person = src / "a" / "b" / "Person.java"
    person.write_text(PERSON_JAVA, encoding="utf-8")
    main = src / "Main.java"
    main.write_text(MAIN_JAVA, encoding="utf-8")
    return person, main


def test_builder_compiles_and_populates(tmp_path: Path, jdk, fixed_clock):
    person, main = _write_sources(tmp_path)
    gen = tmp_path / "gen"
    run_generation_pass([_person_descriptor()], FileSystemSink(gen), clock=fixed_clock)

    out = jdk(
        [person, main, gen / "a" / "b" / "PersonBuilder.java"],
        tmp_path / "classes",
        "Main",
    )
    assert out.splitlines() == [
        "Ada|36|[math]",
        "null|0|null",
        "true",
    ]


def test_unknown_field_skipped_at_build(tmp_path: Path, jdk, fixed_clock):
    """A field missing from the class is skipped; the fields after it are still set."""
    person, main = _write_sources(tmp_path)
    gen = tmp_path / "gen"
    descriptor = _person_descriptor(FieldSpec(name="nickname", type="String"))
    run_generation_pass([descriptor], FileSystemSink(gen), clock=fixed_clock)

    out = jdk(
        [person, main, gen / "a" / "b" / "PersonBuilder.java"],
        tmp_path / "classes",
        "Main",
    )
    assert out.splitlines()[0] == "Ada|36|[math]"


def test_default_package_builder_compiles(tmp_path: Path, jdk, fixed_clock):
    src = tmp_path / "src"
    src.mkdir()
    (src / "Point.java").write_text(textwrap.dedent("""\
        public class Point {
            private int x;
            public int getX() { return x; }
        }
    """), encoding="utf-8")
    (src / "PointMain.java").write_text(textwrap.dedent("""\
        public class PointMain {
            public static void main(String[] args) {
                System.out.println(new PointBuilder().withX(7).build().getX());
            }
        }
    """), encoding="utf-8")

    gen = tmp_path / "gen"
    descriptor = ClassDescriptor(
        qualified_name="Point", fields=[FieldSpec(name="x", type="int")],
    )
    run_generation_pass([descriptor], FileSystemSink(gen), clock=fixed_clock)

    out = jdk(
        [src / "Point.java", src / "PointMain.java", gen / "PointBuilder.java"],
        tmp_path / "classes",
        "PointMain",
    )
    assert out.strip() == "7"
