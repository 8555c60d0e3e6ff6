"""
chart_catalog.py - Chart Menu & Recreation Code Templates

The ten chart families offered after an upload, and a canned R (ggplot2)
and Python (seaborn/matplotlib) snippet for each. The snippets use
placeholder column names; they are display text, not generated from the
uploaded data.
"""

from ..models.schemas import ChartDefinition, ChartType, CodeSnippets

CHART_TYPES: list[ChartDefinition] = [
    ChartDefinition(
        id=ChartType.HISTOGRAM, name="Histogram", color="#3b82f6",
        description="Visualize the distribution of a single numerical variable.",
    ),
    ChartDefinition(
        id=ChartType.BAR, name="Bar Plot", color="#6366f1",
        description="Compare quantities across different categories.",
    ),
    ChartDefinition(
        id=ChartType.BOX, name="Box Plot", color="#a855f7",
        description="Show summary statistics (median, quartiles) and outliers.",
    ),
    ChartDefinition(
        id=ChartType.VIOLIN, name="Violin Plot", color="#ec4899",
        description="Combine box plot and density plot to show distribution shape.",
    ),
    ChartDefinition(
        id=ChartType.SCATTER, name="Scatter Plot", color="#f43f5e",
        description="Reveal relationships between two numerical variables.",
    ),
    ChartDefinition(
        id=ChartType.LINE, name="Line Plot", color="#f97316",
        description="Track changes over time or continuous intervals.",
    ),
    ChartDefinition(
        id=ChartType.DENSITY, name="Density Plot", color="#f59e0b",
        description="Smooth curve representing the distribution of data.",
    ),
    ChartDefinition(
        id=ChartType.RIDGELINE, name="Ridgeline Plot", color="#14b8a6",
        description="Compare distributions of a numeric variable across groups.",
    ),
    ChartDefinition(
        id=ChartType.HEATMAP, name="Heatmap", color="#06b6d4",
        description="Visualize correlation matrix or 2D density.",
    ),
    ChartDefinition(
        id=ChartType.AREA, name="Area Plot", color="#10b981",
        description="Visualize quantitative data as a filled area over time.",
    ),
]

_R_SAVE = 'ggsave("plot_output.png", width = 8, height = 6)'
_R_HEAD = 'library(ggplot2)\ndata <- read.csv("dataset.csv")\n'
_PY_HEAD = (
    "import pandas as pd\n"
    "import seaborn as sns\n"
    "import matplotlib.pyplot as plt\n\n"
    'df = pd.read_csv("dataset.csv")\n'
)

R_TEMPLATES: dict[ChartType, str] = {
    ChartType.HISTOGRAM: _R_HEAD + """
ggplot(data, aes(x = numeric_column)) +
  geom_histogram(fill = "#6366f1", color = "white", bins = 30) +
  theme_minimal() +
  labs(title = "Histogram Analysis", x = "Value", y = "Count") +
  theme(text = element_text(size = 14))

""" + _R_SAVE,
    ChartType.BAR: _R_HEAD + """
ggplot(data, aes(x = category_column, y = value_column, fill = category_column)) +
  geom_bar(stat = "identity") +
  theme_minimal() +
  scale_fill_viridis_d() +
  labs(title = "Categorical Bar Plot")

""" + _R_SAVE,
    ChartType.BOX: _R_HEAD + """
ggplot(data, aes(x = category_column, y = numeric_column, fill = category_column)) +
  geom_boxplot(alpha = 0.7) +
  theme_minimal() +
  labs(title = "Box Plot Distribution")

""" + _R_SAVE,
    ChartType.VIOLIN: _R_HEAD + """
ggplot(data, aes(x = category_column, y = numeric_column, fill = category_column)) +
  geom_violin(trim = FALSE, alpha = 0.6) +
  geom_boxplot(width = 0.1, fill = "white") +
  theme_minimal() +
  labs(title = "Violin Plot Analysis")

""" + _R_SAVE,
    ChartType.SCATTER: _R_HEAD + """
ggplot(data, aes(x = numeric_x, y = numeric_y, color = category_group)) +
  geom_point(size = 3, alpha = 0.8) +
  theme_minimal() +
  labs(title = "Scatter Plot Correlation")

""" + _R_SAVE,
    ChartType.LINE: _R_HEAD + """
ggplot(data, aes(x = time_column, y = value_column, group = 1)) +
  geom_line(color = "#ec4899", size = 1.2) +
  geom_point(color = "#be185d") +
  theme_minimal() +
  labs(title = "Time Series Trend")

""" + _R_SAVE,
    ChartType.DENSITY: _R_HEAD + """
ggplot(data, aes(x = numeric_column, fill = category_column)) +
  geom_density(alpha = 0.5) +
  theme_minimal() +
  labs(title = "Density Distribution")

""" + _R_SAVE,
    ChartType.RIDGELINE: "library(ggplot2)\nlibrary(ggridges)\n" + 'data <- read.csv("dataset.csv")\n' + """
ggplot(data, aes(x = numeric_column, y = category_column, fill = category_column)) +
  geom_density_ridges(alpha = 0.7) +
  theme_ridges() +
  theme(legend.position = "none") +
  labs(title = "Ridgeline Plot")

""" + _R_SAVE,
    ChartType.HEATMAP: "library(ggplot2)\nlibrary(reshape2)\n" + 'data <- read.csv("dataset.csv")\n' + """cormat <- round(cor(data[sapply(data, is.numeric)]), 2)
melted_cormat <- melt(cormat)

ggplot(data = melted_cormat, aes(x = Var1, y = Var2, fill = value)) +
  geom_tile() +
  scale_fill_gradient2(low = "blue", high = "red", mid = "white", midpoint = 0) +
  theme_minimal() +
  labs(title = "Correlation Heatmap")

""" + _R_SAVE,
    ChartType.AREA: _R_HEAD + """
ggplot(data, aes(x = time_column, y = value_column, fill = category_column)) +
  geom_area(alpha = 0.6, size = .5, colour = "white") +
  theme_minimal() +
  labs(title = "Stacked Area Chart")

""" + _R_SAVE,
}

PYTHON_TEMPLATES: dict[ChartType, str] = {
    ChartType.HISTOGRAM: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.histplot(data=df, x="numeric_column", kde=True, color="#6366f1")
plt.title("Histogram Analysis")
plt.savefig("plot_output.png")""",
    ChartType.BAR: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.barplot(data=df, x="category_column", y="value_column", palette="viridis")
plt.title("Categorical Bar Plot")
plt.savefig("plot_output.png")""",
    ChartType.BOX: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.boxplot(data=df, x="category_column", y="numeric_column", palette="pastel")
plt.title("Box Plot Distribution")
plt.savefig("plot_output.png")""",
    ChartType.VIOLIN: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.violinplot(data=df, x="category_column", y="numeric_column", split=True, inner="quart")
plt.title("Violin Plot Analysis")
plt.savefig("plot_output.png")""",
    ChartType.SCATTER: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.scatterplot(data=df, x="numeric_x", y="numeric_y", hue="category_group", s=100)
plt.title("Scatter Plot Correlation")
plt.savefig("plot_output.png")""",
    ChartType.LINE: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.lineplot(data=df, x="time_column", y="value_column", marker='o', color="#ec4899")
plt.title("Time Series Trend")
plt.savefig("plot_output.png")""",
    ChartType.DENSITY: _PY_HEAD + """plt.figure(figsize=(10, 6))
sns.kdeplot(data=df, x="numeric_column", hue="category_column", fill=True, alpha=0.5)
plt.title("Density Distribution")
plt.savefig("plot_output.png")""",
    ChartType.RIDGELINE: """import pandas as pd
import joypy
import matplotlib.pyplot as plt

# Requires joypy installed
df = pd.read_csv("dataset.csv")
plt.figure(figsize=(10, 6))
fig, axes = joypy.joyplot(df, by="category_column", column="numeric_column", colormap=plt.cm.Spectral)
plt.title("Ridgeline Plot")
plt.savefig("plot_output.png")""",
    ChartType.HEATMAP: _PY_HEAD + """plt.figure(figsize=(10, 8))
corr = df.select_dtypes(include='number').corr()
sns.heatmap(corr, annot=True, cmap="coolwarm", fmt=".2f")
plt.title("Correlation Heatmap")
plt.savefig("plot_output.png")""",
    ChartType.AREA: """import pandas as pd
import matplotlib.pyplot as plt

df = pd.read_csv("dataset.csv")
df.plot.area(x="time_column", y=["val1", "val2"], alpha=0.5, figsize=(10, 6))
plt.title("Stacked Area Chart")
plt.savefig("plot_output.png")""",
}


def code_for(chart_type: ChartType) -> CodeSnippets:
    return CodeSnippets(r=R_TEMPLATES[chart_type], python=PYTHON_TEMPLATES[chart_type])
