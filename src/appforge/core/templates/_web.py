"""React + Vite web application boilerplate."""

from __future__ import annotations

from appforge.core.config import ProjectConfig
from appforge.core.types import StateManagement


def _api_base(config: ProjectConfig) -> str:
    return "/api/v1" if config.backend.api_versioning else "/api"


def index_html(config: ProjectConfig) -> str:
    return f"""\
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{config.name}</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/index.tsx"></script>
  </body>
</html>
"""


def vite_config(config: ProjectConfig) -> str:
    return f"""\
import {{ defineConfig }} from 'vite';
import react from '@vitejs/plugin-react';

export default defineConfig({{
  plugins: [react()],
  server: {{
    port: 5173,
    proxy: {{
      '{_api_base(config)}': 'http://localhost:3000',
    }},
  }},
}});
"""


def index_tsx(config: ProjectConfig) -> str:
    imports = [
        "import React from 'react';",
        "import ReactDOM from 'react-dom/client';",
        "import { BrowserRouter } from 'react-router-dom';",
        "import App from './app/App';",
        "import './index.css';",
    ]
    opening: list[str] = []
    closing: list[str] = []

    if config.state_management == StateManagement.REDUX:
        imports += [
            "import { Provider } from 'react-redux';",
            "import { store } from './lib/store';",
        ]
        opening.append("<Provider store={store}>")
        closing.insert(0, "</Provider>")
    elif config.state_management == StateManagement.CONTEXT:
        imports.append("import { AppProvider } from './lib/AppContext';")
        opening.append("<AppProvider>")
        closing.insert(0, "</AppProvider>")

    if config.theme_toggle:
        imports.append("import { ThemeProvider } from './lib/theme';")
        opening.append("<ThemeProvider>")
        closing.insert(0, "</ThemeProvider>")

    if config.features.authentication and config.state_management == StateManagement.CONTEXT:
        imports.append("import { AuthProvider } from './features/auth/AuthContext';")
        opening.append("<AuthProvider>")
        closing.insert(0, "</AuthProvider>")

    opening.append("<BrowserRouter>")
    closing.insert(0, "</BrowserRouter>")

    body: list[str] = []
    depth = 2
    for tag in opening:
        body.append("  " * depth + tag)
        depth += 1
    body.append("  " * depth + "<App />")
    for tag in closing:
        depth -= 1
        body.append("  " * depth + tag)

    return (
        "\n".join(imports)
        + "\n\nconst root = ReactDOM.createRoot(document.getElementById('root') as HTMLElement);\n\n"
        + "root.render(\n  <React.StrictMode>\n"
        + "\n".join(body)
        + "\n  </React.StrictMode>\n);\n"
    )


def app_tsx(config: ProjectConfig) -> str:
    imports = [
        "import { Route, Routes } from 'react-router-dom';",
        "import Layout from '../shared/Layout';",
        "import Home from '../features/home/Home';",
    ]
    routes = ['<Route path="/" element={<Home />} />']
    features = config.features

    if features.authentication:
        imports.append("import LoginForm from '../features/auth/components/LoginForm';")
        routes.append('<Route path="/login" element={<LoginForm />} />')

    guard = features.authentication and config.backend.role_based_auth
    if guard:
        imports.append("import RoleGuard from '../features/auth/components/RoleGuard';")

    if features.user_profiles:
        imports.append("import Profile from '../features/profiles/components/Profile';")
        element = "<RoleGuard role=\"user\"><Profile /></RoleGuard>" if guard else "<Profile />"
        routes.append(f'<Route path="/profile" element={{{element}}} />')

    if features.user_settings:
        imports.append("import Settings from '../features/settings/components/Settings';")
        routes.append('<Route path="/settings" element={<Settings />} />')

    routes_str = "\n".join(f"        {r}" for r in routes)
    return (
        "\n".join(imports)
        + f"""

export default function App() {{
  return (
    <Layout>
      <Routes>
{routes_str}
      </Routes>
    </Layout>
  );
}}
"""
    )


def index_css(config: ProjectConfig) -> str:
    content = """\
:root {
  --color-bg: #ffffff;
  --color-fg: #1f2933;
  --color-accent: #2563eb;
  font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif;
}

* {
  box-sizing: border-box;
}

body {
  margin: 0;
  background: var(--color-bg);
  color: var(--color-fg);
}
"""
    if config.theme_toggle:
        content += """
[data-theme='dark'] {
  --color-bg: #111827;
  --color-fg: #f9fafb;
  --color-accent: #60a5fa;
}
"""
    if config.features.responsive_layout:
        content += "\n@import './assets/styles/responsive.css';\n"
    return content


def layout_tsx(config: ProjectConfig) -> str:
    return """\
import { ReactNode } from 'react';
import Navbar from './Navbar';

interface LayoutProps {
  children: ReactNode;
}

export default function Layout({ children }: LayoutProps) {
  return (
    <div className="layout">
      <Navbar />
      <main className="layout__content">{children}</main>
    </div>
  );
}
"""


def navbar_tsx(config: ProjectConfig) -> str:
    imports = ["import { Link } from 'react-router-dom';"]
    links = ['<Link to="/">Home</Link>']
    hooks: list[str] = []
    if config.features.authentication:
        links.append('<Link to="/login">Login</Link>')
    if config.features.user_profiles:
        links.append('<Link to="/profile">Profile</Link>')
    if config.features.user_settings:
        links.append('<Link to="/settings">Settings</Link>')
    if config.theme_toggle:
        imports.append("import { useTheme } from '../lib/theme';")
        hooks.append("  const { theme, toggleTheme } = useTheme();\n")
        links.append(
            "<button type=\"button\" onClick={toggleTheme}>"
            "{theme === 'dark' ? 'Light mode' : 'Dark mode'}</button>"
        )

    links_str = "\n".join(f"      {link}" for link in links)
    return (
        "\n".join(imports)
        + "\n\nexport default function Navbar() {\n"
        + "".join(hooks)
        + f"""\
  return (
    <nav className="navbar">
{links_str}
    </nav>
  );
}}
"""
    )


def home_tsx(config: ProjectConfig) -> str:
    return f"""\
export default function Home() {{
  return (
    <section className="home">
      <h1>Welcome to {config.name}!</h1>
      <p>Edit src/features/home/Home.tsx to get started.</p>
    </section>
  );
}}
"""


def responsive_css(config: ProjectConfig) -> str:
    return """\
.layout__content {
  max-width: 1200px;
  margin: 0 auto;
  padding: 1rem;
}

.navbar {
  display: flex;
  gap: 1rem;
  padding: 1rem;
}

@media (max-width: 768px) {
  .navbar {
    flex-direction: column;
  }

  .layout__content {
    padding: 0.5rem;
  }
}
"""


def theme_tsx(config: ProjectConfig) -> str:
    return """\
import { createContext, ReactNode, useContext, useEffect, useState } from 'react';

type Theme = 'light' | 'dark';

interface ThemeContextValue {
  theme: Theme;
  toggleTheme: () => void;
}

const ThemeContext = createContext<ThemeContextValue | undefined>(undefined);

export function ThemeProvider({ children }: { children: ReactNode }) {
  const [theme, setTheme] = useState<Theme>(
    () => (localStorage.getItem('theme') as Theme | null) ?? 'light'
  );

  useEffect(() => {
    document.documentElement.dataset.theme = theme;
    localStorage.setItem('theme', theme);
  }, [theme]);

  const toggleTheme = () => setTheme(t => (t === 'light' ? 'dark' : 'light'));

  return (
    <ThemeContext.Provider value={{ theme, toggleTheme }}>{children}</ThemeContext.Provider>
  );
}

export function useTheme(): ThemeContextValue {
  const ctx = useContext(ThemeContext);
  if (!ctx) {
    throw new Error('useTheme must be used inside ThemeProvider');
  }
  return ctx;
}
"""


def login_form_tsx(config: ProjectConfig) -> str:
    if config.state_management == StateManagement.REDUX:
        hook_import = (
            "import { useDispatch } from 'react-redux';\n"
            "import { loginSucceeded } from '../authSlice';\n"
        )
        hook = "  const dispatch = useDispatch();\n"
        on_success = "dispatch(loginSucceeded(user));"
    elif config.state_management == StateManagement.CONTEXT:
        hook_import = "import { useAuth } from '../AuthContext';\n"
        hook = "  const { setUser } = useAuth();\n"
        on_success = "setUser(user);"
    else:
        hook_import = ""
        hook = ""
        on_success = "console.info('Logged in as', user.email);"

    return f"""\
import {{ FormEvent, useState }} from 'react';
import {{ login }} from '../services/authService';
{hook_import}
export default function LoginForm() {{
  const [email, setEmail] = useState('');
  const [password, setPassword] = useState('');
  const [error, setError] = useState<string | null>(null);
{hook}
  const handleSubmit = async (event: FormEvent) => {{
    event.preventDefault();
    try {{
      const user = await login(email, password);
      {on_success}
    }} catch (err) {{
      setError('Invalid email or password');
    }}
  }};

  return (
    <form className="login-form" onSubmit={{handleSubmit}}>
      <input type="email" value={{email}} onChange={{e => setEmail(e.target.value)}} />
      <input
        type="password"
        value={{password}}
        onChange={{e => setPassword(e.target.value)}}
      />
      {{error && <p role="alert">{{error}}</p>}}
      <button type="submit">Sign in</button>
    </form>
  );
}}
"""


def role_guard_tsx(config: ProjectConfig) -> str:
    return """\
import { ReactNode } from 'react';
import { Navigate } from 'react-router-dom';
import { getCurrentUser } from '../services/authService';

interface RoleGuardProps {
  role: string;
  children: ReactNode;
}

export default function RoleGuard({ role, children }: RoleGuardProps) {
  const user = getCurrentUser();
  if (!user || !user.roles.includes(role)) {
    return <Navigate to="/login" replace />;
  }
  return <>{children}</>;
}
"""


def profile_tsx(config: ProjectConfig) -> str:
    return """\
export default function Profile() {
  return (
    <section className="profile">
      <h2>Your profile</h2>
      <p>Show and edit user details here.</p>
    </section>
  );
}
"""


def settings_tsx(config: ProjectConfig) -> str:
    return """\
export default function Settings() {
  return (
    <section className="settings">
      <h2>Settings</h2>
      <p>Manage user preferences here.</p>
    </section>
  );
}
"""


def api_client_ts(config: ProjectConfig) -> str:
    return f"""\
import axios from 'axios';

export const apiClient = axios.create({{
  baseURL: import.meta.env.VITE_API_URL ?? '{_api_base(config)}',
  timeout: 30000,
}});

apiClient.interceptors.request.use(request => {{
  const token = localStorage.getItem('token');
  if (token) {{
    request.headers.Authorization = `Bearer ${{token}}`;
  }}
  return request;
}});
"""


def graphql_client_ts(config: ProjectConfig) -> str:
    return f"""\
import {{ ApolloClient, InMemoryCache }} from '@apollo/client';

export const graphqlClient = new ApolloClient({{
  uri: import.meta.env.VITE_GRAPHQL_URL ?? '{_api_base(config)}/graphql',
  cache: new InMemoryCache(),
}});
"""
