import unittest

from fluentdot import Compass, CreationContext, Serializer, between, compass, graph, html, node, record, to
from fluentdot.context import setcontexts


class SerializerTest(unittest.TestCase):
    def tearDown(self):
        setcontexts(())

    def assertGraph(self, expected, g):
        self.assertEqual(expected.replace("'", '"'), Serializer(g).serialize())

    def test_simple(self):
        self.assertGraph("graph {\n}", graph())

    def test_directed(self):
        self.assertGraph("digraph 'x' {\n}", graph("x").directed())

    def test_strict(self):
        self.assertGraph("strict graph 'x' {\n}", graph("x").strict())

    def test_strict_directed(self):
        self.assertGraph("strict digraph 'x' {\n}", graph("x").strict().directed())

    def test_escape_name(self):
        self.assertEqual('graph "b\\"la" {\n}', Serializer(graph('b"la')).serialize())

    def test_html_name(self):
        self.assertGraph("graph <bla> {\n}", graph(html("bla")))

    def test_graph_attr(self):
        self.assertGraph("graph 'x' {\ngraph ['bla'='blu']\n}", graph("x").graph_attr.attr("bla", "blu"))

    def test_node_attr(self):
        self.assertGraph("graph 'x' {\nnode ['bla'='blu']\n}", graph("x").node_attr.attr("bla", "blu"))

    def test_link_attr(self):
        self.assertGraph("graph 'x' {\nedge ['bla'='blu']\n}", graph("x").link_attr.attr("bla", "blu"))

    def test_general_attr(self):
        self.assertGraph("graph 'x' {\n'bla'='blu'\n}", graph("x").general.attr("bla", "blu"))

    def test_all_attr_tables(self):
        g = (
            graph("x")
            .attr("label", "X")
            .link_attr.attr("color", "red")
            .node_attr.attr("shape", "box")
            .graph_attr.attr("rankdir", "LR")
        )
        self.assertGraph(
            "graph 'x' {\ngraph ['rankdir'='LR']\nnode ['shape'='box']\nedge ['color'='red']\n'label'='X'\n}", g
        )

    def test_attr_list_order(self):
        self.assertGraph(
            "graph 'x' {\nnode ['a'='1','b'='2','c'='3']\n}",
            graph("x").node_attr.attrs({"a": 1, "b": 2}).node_attr.attr("c", 3),
        )

    def test_html_attr_value(self):
        self.assertGraph(
            "graph 'x' {\n'x' ['label'=<<b>X</b>>]\n}", graph("x").node(node("x").attr("label", html("<b>X</b>")))
        )

    def test_nodes(self):
        self.assertGraph("graph 'x' {\n'x' ['bla'='blu']\n}", graph("x").node(node("x").attr("bla", "blu")))

    def test_bare_node(self):
        self.assertGraph("graph 'x' {\n'x'\n}", graph("x").node(node("x")))

    def test_context(self):
        CreationContext.begin().graphs().attr("g", "x").nodes().attr("n", "y").links().attr("l", "z")
        self.assertGraph(
            "graph 'x' {\n'g'='x'\n'x' ['n'='y','bla'='blu']\n'y' ['n'='y']\n'x' -- 'y' ['l'='z']\n}",
            graph("x").node(node("x").attr("bla", "blu").link(node("y"))),
        )
        CreationContext.end()

    def test_subgraph(self):
        self.assertGraph(
            "graph 'x' {\nsubgraph 'x' {\n'x' ['bla'='blu']\n}\n}",
            graph("x").graph(graph("x").node(node("x").attr("bla", "blu"))),
        )

    def test_nameless_subgraph(self):
        self.assertGraph(
            "graph 'x' {\n{\n'x' ['bla'='blu']\n}\n}",
            graph("x").graph(graph().node(node("x").attr("bla", "blu"))),
        )

    def test_nested_subgraphs(self):
        self.assertGraph(
            "graph 'x' {\nsubgraph 'a' {\nsubgraph 'b' {\n'n'\n}\n}\n{\n}\n}",
            graph("x").graph(graph("a").graph(graph("b").node(node("n")))).graph(graph()),
        )

    def test_simple_edge(self):
        self.assertGraph("graph 'x' {\n'x' -- 'y'\n}", graph("x").node(node("x").link(node("y"))))

    def test_attr_edge(self):
        self.assertGraph(
            "graph 'x' {\n'x' -- 'y' ['bla'='blu']\n}",
            graph("x").node(node("x").link(to(node("y")).attr("bla", "blu"))),
        )

    def test_multiple_targets(self):
        self.assertGraph(
            "digraph 'x' {\n'x' -> 'y'\n'x' -> 'z'\n}",
            graph("x").directed().node(node("x").link(node("y"), node("z"))),
        )

    def test_graph_edge_start(self):
        self.assertGraph(
            "graph 'x' {\nsubgraph 'y' {\n'z' -- 'a'\n} -- 'x':n\n}",
            graph("x").graph(graph("y").node(node("z").link(node("a"))).link(node("x").compass(Compass.N))),
        )

    def test_graph_edge_end(self):
        self.assertGraph(
            "graph 'x' {\n'x':n -- subgraph 'y' {\n'z' -- 'a'\n}\n}",
            graph("x").node(node("x").link(between(compass(Compass.N), graph("y").node(node("z").link(node("a")))))),
        )

    def test_graph_edge(self):
        self.assertGraph(
            "graph 'x' {\nsubgraph 'y' {\n'z' -- 'a'\n} -- subgraph 'y2' {\n'z2' -- 'a2'\n}\n}",
            graph("x").graph(
                graph("y").node(node("z").link(node("a"))).link(graph("y2").node(node("z2").link(node("a2"))))
            ),
        )

    def test_directed_subgraph_edges(self):
        self.assertGraph(
            "digraph 'x' {\n{\n'a' -> 'b'\n} -> 'c'\n}",
            graph("x").directed().graph(graph().node(node("a").link(node("b"))).link(node("c"))),
        )

    def test_compass_edge(self):
        self.assertGraph(
            "graph 'x' {\n'x':sw -- 'y':ne\n}",
            graph("x").node(node("x").link(between(compass(Compass.SW), node("y").compass(Compass.NE)))),
        )

    def test_record_edge(self):
        self.assertGraph(
            "graph 'x' {\n'x':'r1' -- 'y':'r2'\n}",
            graph("x").node(node("x").link(between(record("r1"), node("y").record("r2")))),
        )

    def test_compass_record_edge(self):
        self.assertGraph(
            "graph 'x' {\n'x':'r1':sw -- 'y':'r2':ne\n}",
            graph("x").node(
                node("x").link(between(record("r1").compass(Compass.SW), node("y").record("r2").compass(Compass.NE)))
            ),
        )

    def test_port_edge(self):
        self.assertGraph(
            "graph 'x' {\n'x' -- 'y':'f':c\n}",
            graph("x").node(node("x").link(node("y").port("f", "c"))),
        )

    def test_complex_edge(self):
        self.assertGraph(
            "digraph 'x' {\n'a' -> 'x'\n'x' -> 'y'\n'y' -> 'z'\n}",
            graph("x").directed().node(node("x").link(node("y").link(node("z")))).node(node("a").link(node("x"))),
        )

    def test_merge_declared_and_linked_node(self):
        self.assertGraph(
            "graph 'x' {\n'y' ['color'='red']\n'x' -- 'y'\n}",
            graph("x").node(node("x").link(node("y"))).node(node("y").attr("color", "red")),
        )

    def test_merge_same_named_nodes(self):
        self.assertGraph(
            "graph 'x' {\n'x' ['a'='2','b'='1']\n'x' -- 'y'\n}",
            graph("x").node(node("x").attr("a", "1").attr("b", "1").link(node("y")), node("x").attr("a", "2")),
        )

    def test_merge_transitive_node_attributes(self):
        self.assertGraph(
            "graph 'x' {\n'x' ['a'='1']\n'z' -- 'x'\n}",
            graph("x").node(node("z").link(node("x").attr("a", "2"))).node(node("x").attr("a", "1")),
        )

    def test_node_statements_keep_declaration_order(self):
        self.assertGraph(
            "digraph 'g' {\n'b' ['k'='1']\n'a' ['k'='2']\n'a' -> 'b'\n}",
            graph("g").directed().node(node("b").attr("k", "1")).node(node("a").attr("k", "2").link(node("b"))),
        )

    def test_long_chain(self):
        chain = node("n2999")
        for i in reversed(range(2999)):
            chain = node(f"n{i}").link(chain)
        edges = "".join(f'"n{i}" -> "n{i + 1}"\n' for i in range(2999))
        self.assertEqual('digraph "g" {\n' + edges + "}", Serializer(graph("g").directed().node(chain)).serialize())

    def test_cycle(self):
        self.assertGraph(
            "digraph 'x' {\n'a' -> 'b'\n'b' -> 'a'\n}",
            graph("x").directed().node(node("a").link(node("b").link(node("a")))),
        )

    def test_self_loop(self):
        self.assertGraph("graph 'x' {\n'a' -- 'a'\n}", graph("x").node(node("a").link(node("a"))))

    def test_shared_link_rendered_once(self):
        y = node("y").link(node("z"))
        self.assertGraph(
            "graph 'x' {\n'x' -- 'y'\n'y' -- 'z'\n}",
            graph("x").node(node("x").link(y)).node(y),
        )

    def test_root_links_not_rendered(self):
        self.assertGraph("graph 'x' {\n'a'\n}", graph("x").node(node("a")).link(node("b")))

    def test_str(self):
        g = graph("x").node(node("x").link(node("y")))
        self.assertEqual(Serializer(g).serialize(), str(g))

    def test_idempotent(self):
        g = graph("x").directed().node(node("x").attr("a", "b").link(node("y").link(node("z"))))
        serializer = Serializer(g)
        self.assertEqual(serializer.serialize(), serializer.serialize())
        self.assertEqual(serializer.serialize(), Serializer(g).serialize())

    def test_not_a_graph(self):
        with self.assertRaises(TypeError):
            Serializer(node("x"))
