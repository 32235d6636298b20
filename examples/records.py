from fluentdot import Compass, CreationContext, between, compass, graph, html, node, record, to
from fluentdot.rendering import to_source

with CreationContext.begin() as ctx:
    ctx.graphs().attr("rankdir", "LR").nodes().attr("fontname", "Sans-Serif").links().attr("color", "#7B8894")

    struct1 = node("struct1").attr("shape", "record").attr("label", "<f0> left|<f1> mid\\ dle|<f2> right")
    struct2 = node("struct2").attr("shape", "record").attr("label", "<f0> one|<f1> two")
    struct3 = node("struct3").attr("label", html("<b>hello</b><br/>world"))

    g = (
        graph("structs")
        .directed()
        .node_attr.attr("shape", "box")
        .node(
            struct1.link(
                between(record("f1"), struct2.record("f0")),
                between(record("f2").compass(Compass.SE), struct3.compass("n")),
            ),
        )
        .graph(graph("cluster_tail").attr("label", "tail").node(node("tail").link(to(node("end")).attr("style", "dashed"))))
        .node(node("end").link(between(compass("s"), struct1)))
    )

print(g)
to_source(g, filename="structs.gv", format="svg").render(view=False)
