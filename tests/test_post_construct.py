import pytest

from litewire import Container, DependencySettings, Lazy, Scope, autowired, declare, post_construct


def test_post_construct_runs_after_dependencies_are_injected():
    c = Container()

    @c.component("Dependency")
    class Dependency:
        value = 100

    @c.component("Dependent")
    class Dependent:
        dependency = autowired("Dependency")

        def __init__(self):
            self.dependency_value = 0

        @post_construct
        def init(self):
            self.dependency_value = self.dependency.value

    assert c.get_dependency("Dependent").dependency_value == 100


def test_multiple_hooks_run_in_declaration_order():
    c = Container()

    @c.component("Multi")
    class Multi:
        def __init__(self):
            self.steps = []

        @post_construct
        def first_init(self):
            self.steps.append("first")

        @post_construct
        def second_init(self):
            self.steps.append("second")

    assert c.get_dependency("Multi").steps == ["first", "second"]


def test_hooks_may_run_before_lazy_dependency_is_read():
    c = Container()
    seen = []

    @c.component("Heavy", lazy=True)
    class Heavy: ...

    @c.component("Owner")
    class Owner:
        heavy = autowired("Heavy")

        @post_construct
        def init(self):
            seen.append(type(self.__dict__["heavy"]))

    owner = c.get_dependency("Owner")
    assert seen == [Lazy]
    assert isinstance(owner.heavy, Heavy)


def test_hooks_run_once_per_singleton():
    c = Container()
    calls = []

    @c.component("Once")
    class Once:
        @post_construct
        def init(self):
            calls.append(self)

    c.get_dependency("Once")
    c.get_dependency("Once")
    assert len(calls) == 1


def test_hooks_run_for_every_prototype():
    c = Container()
    calls = []

    @c.component("Each", scope=Scope.PROTOTYPE)
    class Each:
        @post_construct
        def init(self):
            calls.append(self)

    c.get_dependency("Each")
    c.get_dependency("Each")
    assert len(calls) == 2


def test_failing_hook_propagates_and_instance_is_not_cached():
    c = Container()
    attempts = []

    class Flaky:
        def __init__(self):
            attempts.append(self)

        @post_construct
        def init(self):
            if len(attempts) == 1:
                msg = "not ready"
                raise RuntimeError(msg)

    c.register_dependency("Flaky", Flaky)

    with pytest.raises(RuntimeError, match="not ready"):
        c.get_dependency("Flaky")
    assert c._resolving == []

    flaky = c.get_dependency("Flaky")
    assert flaky is attempts[1]


def test_named_hooks_skip_non_callables():
    c = Container()

    class Named:
        ready = False
        flag = "not callable"

        def __init__(self):
            self.steps = []

        def open(self):
            self.steps.append("open")

        def warm(self):
            self.steps.append("warm")

    declare(Named, post_construct=["open", "missing", "flag", "warm"])
    c.register_dependency("Named", Named)

    assert c.get_dependency("Named").steps == ["open", "warm"]


def test_base_class_hooks_run_before_subclass_hooks():
    c = Container()

    class Base:
        def __init__(self):
            self.steps = []

        @post_construct
        def base_init(self):
            self.steps.append("base")

    declare(Base)

    class Child(Base):
        @post_construct
        def child_init(self):
            self.steps.append("child")

    c.register_dependency("Child", Child)
    assert c.get_dependency("Child").steps == ["base", "child"]


def test_hooks_with_lazy_mutual_references():
    c = Container()

    @c.component("Left", lazy=True)
    class Left:
        right = autowired("Right")

        def __init__(self):
            self.initialized = False

        @post_construct
        def init(self):
            self.initialized = True

    @c.component("Right")
    class Right:
        left = autowired("Left")

        def __init__(self):
            self.initialized = False

        @post_construct
        def init(self):
            self.initialized = True

    left = c.get_dependency("Left")
    assert left.initialized
    assert left.right.initialized
    assert left.right.left is left


def test_hooks_run_after_all_eager_fields_assigned():
    c = Container()
    snapshot = {}

    c.register_dependency("X", type("X", (), {}))
    c.register_dependency("Y", type("Y", (), {}), DependencySettings(scope=Scope.PROTOTYPE))

    class Both:
        x = autowired("X")
        y = autowired("Y")

        @post_construct
        def init(self):
            snapshot.update(x=self.x, y=self.y)

    c.register_dependency("Both", Both)
    both = c.get_dependency("Both")
    assert snapshot == {"x": both.x, "y": both.y}


def test_hook_overridden_in_subclass_runs_subclass_body():
    c = Container()

    class Base:
        def __init__(self):
            self.calls = []

        @post_construct
        def init(self):
            self.calls.append("base")

    class Child(Base):
        def init(self):
            self.calls.append("child")

    c.register_dependency("Child", Child)
    assert c.get_dependency("Child").calls == ["child"]


def test_decorated_override_runs_once():
    c = Container()

    class Base:
        def __init__(self):
            self.calls = []

        @post_construct
        def init(self):
            self.calls.append("base")

    class Child(Base):
        @post_construct
        def init(self):
            super().init()
            self.calls.append("child")

    c.register_dependency("Child", Child)
    assert c.get_dependency("Child").calls == ["base", "child"]


def test_hook_on_undeclared_base_runs():
    c = Container()

    class Base:
        def __init__(self):
            self.ready = False

        @post_construct
        def init(self):
            self.ready = True

    class Service(Base): ...

    c.register_dependency("Service", Service)
    assert c.get_dependency("Service").ready
