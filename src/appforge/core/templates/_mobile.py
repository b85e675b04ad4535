"""Expo + React Native application boilerplate."""

from __future__ import annotations

import json

from appforge.core.config import ProjectConfig
from appforge.core.templates._common import package_name
from appforge.core.types import StateManagement


def app_tsx(config: ProjectConfig) -> str:
    imports = [
        "import { StatusBar } from 'expo-status-bar';",
        "import { NavigationContainer } from '@react-navigation/native';",
        "import AppNavigator from './src/navigation/AppNavigator';",
    ]
    opening: list[str] = []
    closing: list[str] = []

    if config.state_management == StateManagement.REDUX:
        imports += [
            "import { Provider } from 'react-redux';",
            "import { store } from './src/lib/store';",
        ]
        opening.append("<Provider store={store}>")
        closing.insert(0, "</Provider>")
    elif config.state_management == StateManagement.CONTEXT:
        imports.append("import { AppProvider } from './src/lib/AppContext';")
        opening.append("<AppProvider>")
        closing.insert(0, "</AppProvider>")
        if config.features.authentication:
            imports.append("import { AuthProvider } from './src/features/auth/AuthContext';")
            opening.append("<AuthProvider>")
            closing.insert(0, "</AuthProvider>")

    opening.append("<NavigationContainer>")
    closing.insert(0, "</NavigationContainer>")

    body: list[str] = []
    depth = 2
    for tag in opening:
        body.append("  " * depth + tag)
        depth += 1
    body.append("  " * depth + "<AppNavigator />")
    body.append("  " * depth + '<StatusBar style="auto" />')
    for tag in closing:
        depth -= 1
        body.append("  " * depth + tag)

    return (
        "\n".join(imports)
        + "\n\nexport default function App() {\n  return (\n"
        + "\n".join(body)
        + "\n  );\n}\n"
    )


def app_json(config: ProjectConfig) -> str:
    slug = package_name(config.name)
    manifest = {
        "expo": {
            "name": config.name,
            "slug": slug,
            "version": "0.1.0",
            "orientation": "portrait",
            "userInterfaceStyle": "automatic",
            "assetBundlePatterns": ["**/*"],
            "ios": {"supportsTablet": True},
            "android": {"package": f"com.example.{slug.replace('-', '').replace('.', '')}"},
        }
    }
    return json.dumps(manifest, indent=2) + "\n"


def babel_config(config: ProjectConfig) -> str:
    return """\
module.exports = function (api) {
  api.cache(true);
  return {
    presets: ['babel-preset-expo'],
  };
};
"""


def navigator_tsx(config: ProjectConfig) -> str:
    features = config.features
    screens = [("Home", "HomeScreen", None)]
    if features.authentication:
        screens.append(("Login", "LoginScreen", "../features/auth/LoginScreen"))
    if features.user_profiles:
        screens.append(("Profile", "ProfileScreen", "../features/profiles/ProfileScreen"))
    if features.user_settings:
        screens.append(("Settings", "SettingsScreen", "../features/settings/SettingsScreen"))

    imports = [
        "import { Text, View } from 'react-native';",
        "import { createNativeStackNavigator } from '@react-navigation/native-stack';",
    ]
    imports += [f"import {comp} from '{path}';" for _, comp, path in screens if path]
    params = "\n".join(f"  {route}: undefined;" for route, _, _ in screens)
    entries = "\n".join(
        f'      <Stack.Screen name="{route}" component={{{comp}}} />' for route, comp, _ in screens
    )

    return (
        "\n".join(imports)
        + f"""

export type RootStackParamList = {{
{params}
}};

const Stack = createNativeStackNavigator<RootStackParamList>();

function HomeScreen() {{
  return (
    <View style={{{{ flex: 1, alignItems: 'center', justifyContent: 'center' }}}}>
      <Text>Welcome to {config.name}!</Text>
    </View>
  );
}}

export default function AppNavigator() {{
  return (
    <Stack.Navigator>
{entries}
    </Stack.Navigator>
  );
}}
"""
    )


def login_screen_tsx(config: ProjectConfig) -> str:
    return """\
import { useState } from 'react';
import { Button, Text, TextInput, View } from 'react-native';
import { login } from './services/authService';

export default function LoginScreen() {
  const [email, setEmail] = useState('');
  const [password, setPassword] = useState('');
  const [error, setError] = useState<string | null>(null);

  const onSubmit = async () => {
    try {
      await login(email, password);
    } catch (err) {
      setError('Invalid email or password');
    }
  };

  return (
    <View style={{ padding: 16, gap: 12 }}>
      <TextInput placeholder="Email" value={email} onChangeText={setEmail} />
      <TextInput placeholder="Password" secureTextEntry value={password} onChangeText={setPassword} />
      {error && <Text>{error}</Text>}
      <Button title="Sign in" onPress={onSubmit} />
    </View>
  );
}
"""


def profile_screen_tsx(config: ProjectConfig) -> str:
    return """\
import { Text, View } from 'react-native';

export default function ProfileScreen() {
  return (
    <View style={{ padding: 16 }}>
      <Text>Your profile</Text>
    </View>
  );
}
"""


def settings_screen_tsx(config: ProjectConfig) -> str:
    return """\
import { Text, View } from 'react-native';

export default function SettingsScreen() {
  return (
    <View style={{ padding: 16 }}>
      <Text>Settings</Text>
    </View>
  );
}
"""
